from pixcode.error import MalformedCodeError
import crcmod


TAMANHO_MAXIMO = 99

# CRC-16/CCITT-FALSE: polinômio 0x1021, início 0xFFFF, sem reflexão e sem XOR final.
_crc16_ccitt = crcmod.mkCrcFun(0x11021, initCrc=0xFFFF, rev=False, xorOut=0x0000)


def emv(id_, valor):
    if len(valor) > TAMANHO_MAXIMO:
        raise ValueError(
            f'Campo {id_} excede {TAMANHO_MAXIMO} caracteres: {len(valor)}')

    tamanho = f"{len(valor):02d}"
    return f"{id_}{tamanho}{valor}"


def crc16(payload: str) -> str:
    crc = _crc16_ccitt(payload.encode('ascii'))
    return f"{crc:04X}"


def ler_campos(dados: str) -> dict:
    '''
    Lê uma sequência de campos TLV (ID com 2 dígitos, tamanho com 2 dígitos,
    valor) e devolve um dicionário {id: valor} na ordem em que aparecem.
    '''
    campos = {}
    pos = 0

    while pos < len(dados):
        cabecalho = dados[pos:pos + 4]
        if len(cabecalho) < 4 or not (cabecalho.isascii() and cabecalho.isdigit()):
            raise MalformedCodeError(
                f'Cabeçalho TLV inválido na posição {pos}: {cabecalho!r}')

        id_, tamanho = cabecalho[:2], int(cabecalho[2:])
        pos += 4

        valor = dados[pos:pos + tamanho]
        if len(valor) != tamanho:
            raise MalformedCodeError(
                f'Campo {id_} declara {tamanho} caracteres, mas só há {len(valor)}')

        if id_ in campos:
            raise MalformedCodeError(f'Campo {id_} repetido')

        campos[id_] = valor
        pos += tamanho

    return campos
