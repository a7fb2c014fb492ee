import pytest
from decimal import Decimal
from pixcode.error import InvalidInputError
from pixcode.validation import (classificar_chave_pix, cpf_valido, cnpj_valido,
                                normalizar_texto, normalizar_valor)


@pytest.mark.parametrize('chave, tipo', [
    ('52998224725', 'cpf'),
    ('11222333000181', 'cnpj'),
    ('+5511999999999', 'telefone'),
    ('+551133334444', 'telefone'),
    ('email@exemplo.com', 'email'),
    ('123e4567-e12b-12d1-a456-426655440000', 'aleatoria'),
])
def test_classificar_chave_pix(chave, tipo):
    assert classificar_chave_pix(chave) == tipo


@pytest.mark.parametrize('chave', [
    '',
    '   ',
    None,
    '52998224724',
    '11111111111',
    '11222333000180',
    '12345',
    '529.982.247-25',
    '11999999999999999',
    'sem-arroba.com',
    'joão@exemplo.com',
    'a' * 70 + '@exemplo.com',
])
def test_chave_pix_invalida(chave):
    with pytest.raises(InvalidInputError):
        classificar_chave_pix(chave)


def test_cpf_e_cnpj():
    assert cpf_valido('52998224725')
    assert not cpf_valido('00000000000')
    assert cnpj_valido('11222333000181')
    assert not cnpj_valido('11222333000182')


def test_normalizar_texto():
    assert normalizar_texto('Açaí  do   Zé', 25) == 'Acai  do   Ze'
    assert normalizar_texto(' LOJA  DO ZE ', 25) == ' LOJA  DO ZE '
    assert normalizar_texto('São Paulo', 3) == 'Sao'
    assert normalizar_texto(None, 10) == ''
    assert normalizar_texto('linha\nquebrada', 25) == 'linha quebrada'
    assert normalizar_texto('coluna\tcoluna', 25) == 'coluna coluna'
    assert normalizar_texto('sino\x07', 25) == 'sino'


@pytest.mark.parametrize('valor, esperado', [
    (None, None),
    ('', None),
    (0, None),
    ('0.00', None),
    (10, Decimal('10.00')),
    ('199.9', Decimal('199.90')),
    (199.9, Decimal('199.90')),
    (Decimal('1.5'), Decimal('1.50')),
    (' 42.10 ', Decimal('42.10')),
    ('9999999999.99', Decimal('9999999999.99')),
])
def test_normalizar_valor(valor, esperado):
    assert normalizar_valor(valor) == esperado


@pytest.mark.parametrize('valor', [
    -1, '-0.01', 'abc', True, '1e30', '10000000000.00', '0.001', [10], 'NaN',
])
def test_normalizar_valor_invalido(valor):
    with pytest.raises(InvalidInputError):
        normalizar_valor(valor)


@pytest.mark.parametrize('chave', [52998224725, 1.5, ['email@exemplo.com']])
def test_chave_pix_que_nao_e_texto(chave):
    with pytest.raises(InvalidInputError) as erro:
        classificar_chave_pix(chave)

    assert erro.value.campo == 'pix_key'


def test_normalizar_valor_informa_campo():
    with pytest.raises(InvalidInputError) as erro:
        normalizar_valor('-5', campo='frete')

    assert erro.value.campo == 'frete'
