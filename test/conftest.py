import pytest
from pixcode import create_app


CONFIG_TESTE = {
    'TESTING': True,
    'PIX_CHAVE': 'email@exemplo.com',
    'PIX_NOME_RECEBEDOR': 'LOJA EXEMPLO',
    'PIX_CIDADE_RECEBEDOR': 'SAO PAULO',
    'PIX_DESCONTO': '0',
}


# Exemplo publicado no manual do BR Code do Banco Central.
CODIGO_BACEN = (
    '00020126580014br.gov.bcb.pix0136123e4567-e12b-12d1-a456-426655440000'
    '5204000053039865802BR5913Fulano de Tal6008BRASILIA62070503***63041D3D'
)


def _crc_bit_a_bit(payload: str) -> str:
    crc = 0xFFFF
    for byte in payload.encode('ascii'):
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ 0x1021
            else:
                crc <<= 1
            crc &= 0xFFFF
    return f'{crc:04X}'


@pytest.fixture
def app():
    return create_app(CONFIG_TESTE)


@pytest.fixture
def client_app(app):
    with app.app_context():
        with app.test_client() as client:
            yield client


@pytest.fixture
def criar_app():
    def _criar(**config):
        return create_app({**CONFIG_TESTE, **config})
    return _criar


@pytest.fixture
def codigo_bacen():
    return CODIGO_BACEN


@pytest.fixture
def crc_referencia():
    return _crc_bit_a_bit
