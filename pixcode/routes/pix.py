from flask import Blueprint, current_app, jsonify, send_file
from pixcode.error import PixError
from pixcode.gerador_qr_code import PixPaymentRequest, encode
from pixcode.imagem_qr_code import gerar_base64, gerar_png
from pixcode.leitor_qr_code import decode
from pixcode.log import configurar_logging
from pixcode.rate_limit import limiter
from pixcode.validation import validar_json, normalizar_valor
from decimal import Decimal, ROUND_HALF_UP
import io
import logging


configurar_logging()
logger = logging.getLogger(__name__)


pix_bp = Blueprint('pix', __name__)


def aplicar_desconto_pix(subtotal, percentual, habilitado=True):
    '''
    Desconto percentual para pagamentos via PIX sobre o subtotal do
    carrinho, arredondado em centavos. Devolve (subtotal_final, desconto).
    '''
    if subtotal is None or not habilitado or not percentual:
        return subtotal, Decimal('0.00')

    desconto = (subtotal * percentual / 100).quantize(
        Decimal('0.01'), rounding=ROUND_HALF_UP)
    return subtotal - desconto, desconto


def _somar(*valores):
    total = sum(v for v in valores if v is not None)
    return normalizar_valor(total)


def _codigo_do_corpo():
    dados = validar_json()
    codigo = dados.get('codigo_pix')

    if not isinstance(codigo, str) or not codigo.strip():
        logger.warning('Campo obrigatório: codigo_pix')
        return None

    return codigo


@pix_bp.route('/', methods=['POST'])
@limiter.limit(lambda: current_app.config['RATELIMIT_DEFAULT'])
def gerar_codigo_pix():
    try:
        logger.info('Gerando código PIX...')

        dados = validar_json()
        config = current_app.config

        subtotal = normalizar_valor(dados.get('valor'))
        frete = normalizar_valor(dados.get('frete'), campo='frete')
        subtotal, desconto = aplicar_desconto_pix(
            subtotal, config['PIX_DESCONTO'], config['PIX_DESCONTO_HABILITADO'])
        valor = _somar(subtotal, frete)

        pedido = PixPaymentRequest(
            pix_key=dados.get('chave_pix') or config['PIX_CHAVE'],
            merchant_name=dados.get('nome_recebedor') or config['PIX_NOME_RECEBEDOR'],
            merchant_city=dados.get('cidade_recebedor') or config['PIX_CIDADE_RECEBEDOR'],
            transaction_amount=valor,
            reference_label=str(dados.get('referencia') or '')
        )

        codigo = encode(pedido)
        lido = decode(codigo)

        logger.info(f'Código PIX da referência {lido.reference_label} gerado com sucesso.')
        return jsonify({
            'codigo_pix': codigo,
            'valor': f'{valor:.2f}' if valor is not None else None,
            'desconto': f'{desconto:.2f}',
            'frete': f'{frete:.2f}' if frete is not None else None,
            'referencia': lido.reference_label,
            'qr_code_base64': gerar_base64(codigo)
        }), 201

    except PixError:
        raise

    except Exception as erro:
        logger.error(f'Erro inesperado ao gerar código PIX: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao gerar código PIX!'}), 500


@pix_bp.route('/decodificar', methods=['POST'])
@limiter.limit(lambda: current_app.config['RATELIMIT_DEFAULT'])
def decodificar_codigo_pix():
    try:
        logger.info('Decodificando código PIX...')

        codigo = _codigo_do_corpo()
        if codigo is None:
            return jsonify({'erro': 'Campo obrigatório: codigo_pix'}), 400

        lido = decode(codigo)

        logger.info('Decodificação de código PIX bem-sucedida.')
        return jsonify(lido.to_dict()), 200

    except PixError:
        raise

    except Exception as erro:
        logger.error(f'Erro inesperado ao decodificar código PIX: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao decodificar código PIX!'}), 500


@pix_bp.route('/qrcode', methods=['POST'])
@limiter.limit(lambda: current_app.config['RATELIMIT_DEFAULT'])
def imagem_codigo_pix():
    try:
        logger.info('Gerando imagem do QR Code PIX...')

        codigo = _codigo_do_corpo()
        if codigo is None:
            return jsonify({'erro': 'Campo obrigatório: codigo_pix'}), 400

        png = gerar_png(codigo)

        logger.info('Imagem do QR Code PIX gerada com sucesso.')
        return send_file(io.BytesIO(png), mimetype='image/png',
                         download_name='pix.png')

    except PixError:
        raise

    except Exception as erro:
        logger.error(f'Erro inesperado ao gerar imagem do QR Code: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao gerar imagem do QR Code!'}), 500
