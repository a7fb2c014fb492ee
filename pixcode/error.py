from flask import jsonify, request
from flask_limiter.errors import RateLimitExceeded
from pixcode.log import configurar_logging
import logging


configurar_logging()
logger = logging.getLogger(__name__)


class PixError(Exception):
    '''Erro base de geração e leitura de códigos PIX.'''


class EncodingError(PixError):
    pass


class InvalidInputError(EncodingError):
    '''Campo de entrada inválido: chave vazia, valor negativo ou não finito.'''

    def __init__(self, campo, mensagem):
        self.campo = campo
        self.mensagem = mensagem
        super().__init__(f'{campo}: {mensagem}')


class DecodingError(PixError):
    pass


class MalformedCodeError(DecodingError):
    pass


class ChecksumError(DecodingError):

    def __init__(self, esperado, encontrado):
        self.esperado = esperado
        self.encontrado = encontrado
        super().__init__(
            f'CRC16 inválido: esperado {esperado}, encontrado {encontrado}')


def register_erro_handlers(app):
    @app.errorhandler(InvalidInputError)
    def entrada_invalida(erro):
        logger.warning(f'Dados inválidos para o código PIX: {str(erro)}')
        return jsonify({'erro': erro.mensagem, 'campo': erro.campo}), 400

    @app.errorhandler(DecodingError)
    def codigo_invalido(erro):
        logger.warning(f'Código PIX inválido: {str(erro)}')
        return jsonify({'erro': str(erro)}), 422

    @app.errorhandler(404)
    def rota_nao_encontrado(erro):
        logger.warning(f'Rota não encontrada: {str(erro)}')
        return jsonify({'erro': 'Rota não encontrada!'}), 404

    @app.errorhandler(RateLimitExceeded)
    def rate_limit_handler(e):
        logger.warning(
            f"RATE LIMIT excedido | IP={request.remote_addr} | rota={request.path}"
        )
        return jsonify({
            'erro': 'Muitas requisições. Tente novamente mais tarde.'
        }), 429

    @app.errorhandler(400)
    def dados_inválidos(erro):
        logger.warning(f'Dados inválidos na rota: {str(erro)}')
        return jsonify({'erro': 'Dados inválidos na rota!'}), 400

    @app.errorhandler(405)
    def metodo_errado(erro):
        logger.warning(f'Método HTTP não permitido nesta rota: {str(erro)}')
        return jsonify({'erro': 'Método HTTP não permitido nesta rota!'}), 405

    @app.errorhandler(Exception)
    def erro_interno(erro):
        logger.error(f'Erro inesperado ao acessar a rota: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao acessar a rota!'}), 500
