from flask import request
from pixcode.error import InvalidInputError
from pixcode.log import configurar_logging
from werkzeug.exceptions import BadRequest
from decimal import Decimal, InvalidOperation
import logging
import re
import unicodedata


configurar_logging()
logger = logging.getLogger(__name__)


TAMANHO_MAXIMO_CHAVE = 77
TAMANHO_MAXIMO_VALOR = 13
VALOR_LIMITE = Decimal('10') ** (TAMANHO_MAXIMO_VALOR - 3)

RE_TELEFONE = re.compile(r'^\+55\d{10,11}$')
RE_EMAIL = re.compile(r'^[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}$')
RE_ALEATORIA = re.compile(
    r'^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$')


def validar_json():
    try:
        if not request.is_json:
            logger.warning('Requisição deve ser Content_type: application/json.')
            raise InvalidInputError(
                'corpo', 'Requisição deve ser Content-type: application/json!')

        dados = request.get_json()
        if not dados or not isinstance(dados, dict):
            logger.warning('Dados ausentes ou inválidos no corpo da requisição.')
            raise InvalidInputError(
                'corpo', 'Dados ausentes ou inválidos no corpo da requisição!')

        return dados
    except BadRequest:
        logger.warning('JSON malformado! Dados inválidos no corpo da requisição.')
        raise InvalidInputError('corpo', 'JSON malformado. Dados inválidos!')


def _digitos_verificadores(digitos, pesos):
    soma = sum(int(d) * p for d, p in zip(digitos, pesos))
    resto = soma % 11
    return '0' if resto < 2 else str(11 - resto)


def cpf_valido(cpf: str) -> bool:
    if len(cpf) != 11 or not cpf.isdigit() or cpf == cpf[0] * 11:
        return False

    primeiro = _digitos_verificadores(cpf[:9], range(10, 1, -1))
    segundo = _digitos_verificadores(cpf[:9] + primeiro, range(11, 1, -1))
    return cpf[9:] == primeiro + segundo


def cnpj_valido(cnpj: str) -> bool:
    if len(cnpj) != 14 or not cnpj.isdigit() or cnpj == cnpj[0] * 14:
        return False

    pesos = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
    primeiro = _digitos_verificadores(cnpj[:12], pesos)
    segundo = _digitos_verificadores(cnpj[:12] + primeiro, [6] + pesos)
    return cnpj[12:] == primeiro + segundo


def classificar_chave_pix(chave: str) -> str:
    '''
    Identifica o tipo da chave PIX: 'cpf', 'cnpj', 'telefone', 'email'
    ou 'aleatoria'. A chave é usada como veio, sem formatação; CPF e CNPJ
    só com dígitos e telefone no formato +55DDDNUMERO.
    '''
    if chave is not None and not isinstance(chave, str):
        raise InvalidInputError('pix_key', 'Chave PIX precisa ser texto!')

    if not chave or not chave.strip():
        raise InvalidInputError('pix_key', 'Chave PIX ausente!')

    if not chave.isascii():
        raise InvalidInputError(
            'pix_key', 'Chave PIX contém caracteres fora do ASCII!')

    if len(chave) > TAMANHO_MAXIMO_CHAVE:
        raise InvalidInputError(
            'pix_key',
            f'Chave PIX excede {TAMANHO_MAXIMO_CHAVE} caracteres!')

    if chave.isdigit():
        if len(chave) == 11 and cpf_valido(chave):
            return 'cpf'
        if len(chave) == 14 and cnpj_valido(chave):
            return 'cnpj'
        raise InvalidInputError('pix_key', 'CPF ou CNPJ inválido!')

    if RE_TELEFONE.match(chave):
        return 'telefone'

    if RE_ALEATORIA.match(chave):
        return 'aleatoria'

    if RE_EMAIL.match(chave):
        return 'email'

    raise InvalidInputError('pix_key', 'Formato de chave PIX não reconhecido!')


def normalizar_texto(texto: str, tamanho_maximo: int) -> str:
    '''
    Remove acentos e qualquer caractere fora do ASCII imprimível e corta em
    `tamanho_maximo`. Quebras de linha e tabulações viram espaço; o resto do
    texto ASCII fica como veio. Depois disso o tamanho em caracteres é igual
    ao tamanho em bytes.
    '''
    texto = unicodedata.normalize('NFKD', texto or '')
    texto = ''.join(c for c in texto if not unicodedata.combining(c))
    texto = texto.encode('ascii', 'ignore').decode('ascii')
    texto = ''.join(
        c if c.isprintable() else ' '
        for c in texto if c.isprintable() or c.isspace()
    )
    return texto[:tamanho_maximo]


def normalizar_valor(valor, campo='transaction_amount'):
    '''
    Converte o valor da transação para Decimal com duas casas.
    Devolve None quando o valor está ausente ou é zero.
    '''
    if valor is None or valor == '':
        return None

    if isinstance(valor, bool):
        raise InvalidInputError(campo, 'Valor inválido!')

    try:
        valor = Decimal(str(valor).strip())
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInputError(campo, 'Valor inválido!')

    if not valor.is_finite():
        raise InvalidInputError(campo, 'Valor não finito!')

    if valor < 0:
        raise InvalidInputError(campo, 'Valor negativo!')

    if valor == 0:
        return None

    if valor >= VALOR_LIMITE:
        raise InvalidInputError(
            campo,
            f'Valor excede {TAMANHO_MAXIMO_VALOR} caracteres!')

    quantizado = valor.quantize(Decimal('0.01'))
    if quantizado != valor:
        raise InvalidInputError(
            campo, 'Valor com mais de duas casas decimais!')

    return quantizado
