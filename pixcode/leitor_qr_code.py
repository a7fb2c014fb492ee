from pixcode.error import ChecksumError, MalformedCodeError
from pixcode.gerador_qr_code import (FORMATO_PAYLOAD, GUI_PIX, ID_CRC,
                                     INICIACAO_ESTATICA, INICIACAO_UNICA)
from pixcode.log import configurar_logging
from pixcode.tlv import crc16, ler_campos
from dataclasses import dataclass, asdict
from decimal import Decimal, InvalidOperation
from typing import Optional
import logging
import re


configurar_logging()
logger = logging.getLogger(__name__)


RE_SUFIXO_CRC = re.compile(r'6304[0-9A-Fa-f]{4}$')

CAMPOS_OBRIGATORIOS = ('00', '26', '52', '53', '58', '59', '60', ID_CRC)


@dataclass(frozen=True)
class PixCode:
    payload_format_indicator: str
    point_of_initiation_method: Optional[str]
    gui: str
    pix_key: Optional[str]
    url: Optional[str]
    merchant_category_code: str
    transaction_currency: str
    transaction_amount: Optional[Decimal]
    country_code: str
    merchant_name: str
    merchant_city: str
    reference_label: Optional[str]
    crc: str
    raw: str

    @property
    def estatico(self) -> bool:
        return self.point_of_initiation_method != INICIACAO_UNICA

    def to_dict(self):
        dados = asdict(self)
        if self.transaction_amount is not None:
            dados['transaction_amount'] = f'{self.transaction_amount:.2f}'
        dados['estatico'] = self.estatico
        return dados


def validar_crc(codigo: str) -> bool:
    '''
    Confere se os 4 últimos caracteres são o CRC16 de tudo o que vem antes,
    incluindo o "6304".
    '''
    if not isinstance(codigo, str):
        return False

    codigo = codigo.strip()
    if not codigo.isascii() or not RE_SUFIXO_CRC.search(codigo):
        return False

    return crc16(codigo[:-4]) == codigo[-4:].upper()


def decode(codigo: str) -> PixCode:
    '''
    Lê um código PIX Cópia e Cola, confere o CRC16 e devolve os campos.
    '''
    if not isinstance(codigo, str) or not codigo.strip():
        raise MalformedCodeError('Código PIX vazio!')

    codigo = codigo.strip()

    if not codigo.isascii():
        raise MalformedCodeError('Código PIX contém caracteres fora do ASCII!')

    if not RE_SUFIXO_CRC.search(codigo):
        raise MalformedCodeError('Código PIX não termina com o campo CRC16 (6304)!')

    esperado = crc16(codigo[:-4])
    encontrado = codigo[-4:].upper()
    if esperado != encontrado:
        raise ChecksumError(esperado, encontrado)

    campos = ler_campos(codigo)

    if list(campos)[-1] != ID_CRC:
        raise MalformedCodeError('Campo CRC16 precisa ser o último do código!')

    faltando = [c for c in CAMPOS_OBRIGATORIOS if c not in campos]
    if faltando:
        raise MalformedCodeError(f"Campos obrigatórios ausentes: {', '.join(faltando)}")

    if campos['00'] != FORMATO_PAYLOAD:
        raise MalformedCodeError(f"Payload Format Indicator inválido: {campos['00']}")

    iniciacao = campos.get('01')
    if iniciacao is not None and iniciacao not in (INICIACAO_ESTATICA, INICIACAO_UNICA):
        raise MalformedCodeError(f'Point of Initiation Method inválido: {iniciacao}')

    conta = ler_campos(campos['26'])
    gui = conta.get('00', '')
    if gui.upper() != GUI_PIX:
        raise MalformedCodeError(f'GUI do arranjo PIX inválido: {gui!r}')

    chave = conta.get('01')
    url = conta.get('25')
    if not chave and not url:
        raise MalformedCodeError('Código PIX sem chave nem URL de cobrança!')

    valor = None
    if '54' in campos:
        try:
            valor = Decimal(campos['54'])
        except InvalidOperation:
            raise MalformedCodeError(f"Valor da transação inválido: {campos['54']!r}")

        if not valor.is_finite() or valor < 0:
            raise MalformedCodeError(f"Valor da transação inválido: {campos['54']!r}")

    referencia = None
    if '62' in campos:
        referencia = ler_campos(campos['62']).get('05')

    logger.debug(f'Código PIX lido | referencia={referencia}')

    return PixCode(
        payload_format_indicator=campos['00'],
        point_of_initiation_method=iniciacao,
        gui=gui,
        pix_key=chave,
        url=url,
        merchant_category_code=campos['52'],
        transaction_currency=campos['53'],
        transaction_amount=valor,
        country_code=campos['58'],
        merchant_name=campos['59'],
        merchant_city=campos['60'],
        reference_label=referencia,
        crc=campos[ID_CRC],
        raw=codigo
    )
