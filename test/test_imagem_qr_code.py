import base64
import pytest
from decimal import Decimal
from pixcode.error import ChecksumError
from pixcode.gerador_qr_code import PixPaymentRequest, encode
from pixcode.imagem_qr_code import gerar_base64, gerar_png


@pytest.fixture
def codigo():
    return encode(PixPaymentRequest(
        pix_key='email@exemplo.com',
        merchant_name='LOJA EXEMPLO',
        merchant_city='SAO PAULO',
        transaction_amount=Decimal('10.00'),
        reference_label='ORD123'
    ))


def test_gerar_png(codigo):
    assert gerar_png(codigo)[:4] == b'\x89PNG'


def test_gerar_base64(codigo):
    imagem = gerar_base64(codigo)
    prefixo = 'data:image/png;base64,'

    assert imagem.startswith(prefixo)
    assert base64.b64decode(imagem[len(prefixo):])[:4] == b'\x89PNG'


def test_codigo_com_crc_errado_nao_vira_imagem(codigo):
    with pytest.raises(ChecksumError):
        gerar_png(codigo[:-4] + ('0000' if codigo[-4:] != '0000' else '1111'))


def test_codigo_do_banco_central(codigo_bacen):
    assert gerar_png(codigo_bacen)[:4] == b'\x89PNG'
