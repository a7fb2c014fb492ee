from pixcode.error import InvalidInputError
from pixcode.log import configurar_logging
from pixcode.tlv import emv, crc16
from pixcode.validation import (classificar_chave_pix,
                                normalizar_texto,
                                normalizar_valor)
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
import logging


configurar_logging()
logger = logging.getLogger(__name__)


FORMATO_PAYLOAD = '01'
INICIACAO_ESTATICA = '12'
INICIACAO_UNICA = '11'
GUI_PIX = 'BR.GOV.BCB.PIX'
CATEGORIA_COMERCIANTE = '0000'
MOEDA_BRL = '986'
PAIS = 'BR'
REFERENCIA_AUSENTE = '***'

TAMANHO_NOME = 25
TAMANHO_CIDADE = 15
TAMANHO_REFERENCIA = 25

ID_CRC = '63'


@dataclass(frozen=True)
class PixPaymentRequest:
    pix_key: str
    merchant_name: str
    merchant_city: str
    transaction_amount: Optional[Decimal] = None
    reference_label: str = ''


def _campo_truncado(campo, nome_campo, valor, tamanho):
    if valor is not None and not isinstance(valor, str):
        raise InvalidInputError(campo, f'{nome_campo} precisa ser texto!')

    texto = normalizar_texto(valor, tamanho)

    if texto != (valor or ''):
        logger.warning(
            f'{nome_campo} normalizado/truncado para {tamanho} caracteres: '
            f'{valor!r} -> {texto!r}')

    return texto


def encode(request: PixPaymentRequest) -> str:
    '''
    Gera o payload PIX Cópia e Cola (BR Code estático) conforme padrão
    BACEN (EMV-Co), terminado pelo CRC16 do próprio payload.
    '''
    tipo_chave = classificar_chave_pix(request.pix_key)
    valor = normalizar_valor(request.transaction_amount)

    nome = _campo_truncado(
        'merchant_name', 'Nome do recebedor', request.merchant_name, TAMANHO_NOME)
    if not nome.strip():
        raise InvalidInputError('merchant_name', 'Nome do recebedor ausente!')

    cidade = _campo_truncado(
        'merchant_city', 'Cidade do recebedor', request.merchant_city,
        TAMANHO_CIDADE)
    if not cidade.strip():
        raise InvalidInputError('merchant_city', 'Cidade do recebedor ausente!')

    referencia = _campo_truncado(
        'reference_label', 'Referência', request.reference_label,
        TAMANHO_REFERENCIA)
    if not referencia.strip():
        referencia = REFERENCIA_AUSENTE

    payload = (
        emv("00", FORMATO_PAYLOAD) +
        emv("01", INICIACAO_ESTATICA) +
        emv(
            "26",
            emv("00", GUI_PIX) +
            emv("01", request.pix_key)
        ) +
        emv("52", CATEGORIA_COMERCIANTE) +
        emv("53", MOEDA_BRL)
    )

    if valor is not None:
        payload += emv("54", f"{valor:.2f}")

    payload += (
        emv("58", PAIS) +
        emv("59", nome) +
        emv("60", cidade) +
        emv("62", emv("05", referencia))
    )

    payload_crc = payload + ID_CRC + "04"
    crc = crc16(payload_crc)

    logger.info(
        f'Código PIX gerado | chave={tipo_chave} | referencia={referencia} '
        f'| valor={valor if valor is not None else "livre"}')
    return payload_crc + crc
