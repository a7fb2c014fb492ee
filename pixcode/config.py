from decimal import Decimal, InvalidOperation
import os


PIX_CHAVE = os.environ.get('PIX_CHAVE', '')
PIX_NOME_RECEBEDOR = os.environ.get('PIX_NOME_RECEBEDOR', 'LOJA')
PIX_CIDADE_RECEBEDOR = os.environ.get('PIX_CIDADE_RECEBEDOR', 'SAO PAULO')
PIX_DESCONTO = os.environ.get('PIX_DESCONTO', '0')
PIX_DESCONTO_HABILITADO = os.environ.get('PIX_DESCONTO_HABILITADO', '0') == '1'

LOG_DIR = os.environ.get('LOG_DIR', 'logs')
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
LOG_MAX_BYTES = 2000000
LOG_BACKUP_COUNT = 5

RATE_LIMIT = os.environ.get('RATE_LIMIT', '100 per hour')


def _percentual_desconto(valor):
    try:
        percentual = Decimal(str(valor).strip())
    except InvalidOperation:
        raise ValueError(f'PIX_DESCONTO inválido: {valor!r}')

    if not percentual.is_finite() or percentual < 0 or percentual > 100:
        raise ValueError(f'PIX_DESCONTO precisa estar entre 0 e 100: {valor!r}')

    return percentual


def carregar_config(sobrescrever=None):
    '''
    Monta o dicionário de configuração do app Flask a partir do ambiente,
    aplicando os valores de `sobrescrever` por cima. Percentual de desconto
    fora de 0-100 impede o app de subir.
    '''
    config = {
        'PIX_CHAVE': PIX_CHAVE,
        'PIX_NOME_RECEBEDOR': PIX_NOME_RECEBEDOR,
        'PIX_CIDADE_RECEBEDOR': PIX_CIDADE_RECEBEDOR,
        'PIX_DESCONTO': PIX_DESCONTO,
        'PIX_DESCONTO_HABILITADO': PIX_DESCONTO_HABILITADO,
        'RATELIMIT_DEFAULT': RATE_LIMIT,
        'RATELIMIT_STORAGE_URI': 'memory://',
    }

    if sobrescrever:
        config.update(sobrescrever)

    config['PIX_DESCONTO'] = _percentual_desconto(config['PIX_DESCONTO'])
    return config
