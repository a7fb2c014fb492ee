import pytest
from pixcode.error import MalformedCodeError
from pixcode.tlv import emv, crc16, ler_campos


def test_emv_campo_simples():
    assert emv('00', '01') == '000201'


def test_emv_tamanho_com_zero_a_esquerda():
    assert emv('26', 'BR.GOV.BCB.PIX') == '2614BR.GOV.BCB.PIX'


def test_emv_campo_maior_que_99():
    with pytest.raises(ValueError):
        emv('59', 'A' * 100)


def test_crc16_valor_de_verificacao():
    # Valor de verificação do CRC-16/CCITT-FALSE.
    assert crc16('123456789') == '29B1'


def test_crc16_maiusculo_com_quatro_digitos(crc_referencia):
    for payload in ('', 'A', '6304', 'payload qualquer 6304'):
        crc = crc16(payload)
        assert len(crc) == 4
        assert crc == crc.upper()
        assert crc == crc_referencia(payload)


def test_ler_campos_aninhados():
    campos = ler_campos('000201' + emv('26', emv('00', 'BR.GOV.BCB.PIX') + emv('01', 'chave')))

    assert list(campos) == ['00', '26']
    assert ler_campos(campos['26']) == {'00': 'BR.GOV.BCB.PIX', '01': 'chave'}


def test_ler_campos_tamanho_maior_que_dados():
    with pytest.raises(MalformedCodeError):
        ler_campos('000501')


def test_ler_campos_cabecalho_invalido():
    with pytest.raises(MalformedCodeError):
        ler_campos('00AB01')


def test_ler_campos_repetido():
    with pytest.raises(MalformedCodeError):
        ler_campos('000201000201')


def test_ler_campos_vazio():
    assert ler_campos('') == {}
