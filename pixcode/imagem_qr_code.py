from pixcode.leitor_qr_code import decode
from pixcode.log import configurar_logging
import qrcode
import base64
import io
import logging


configurar_logging()
logger = logging.getLogger(__name__)


def gerar_png(codigo_pix: str, box_size: int = 10, border: int = 4) -> bytes:
    '''
    Gera a imagem PNG do QR Code a partir do código PIX Cópia e Cola.
    O código é lido antes, então um CRC16 inválido nunca vira imagem.
    '''
    codigo = decode(codigo_pix).raw

    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border
    )
    qr.add_data(codigo)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format='PNG')
    logger.debug(f'QR Code gerado na versão {qr.version}.')
    return buffer.getvalue()


def gerar_base64(codigo_pix: str) -> str:
    base64_image = base64.b64encode(gerar_png(codigo_pix)).decode()
    return f"data:image/png;base64,{base64_image}"
