from flask_limiter import Limiter
from flask_limiter.util import get_remote_address


# Limites padrão vêm de RATELIMIT_DEFAULT na config do app.
limiter = Limiter(key_func=get_remote_address)
