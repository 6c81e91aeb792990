"""Development settings for Homio.

Extends the base settings with debug enabled, all hosts allowed and the
console email backend. Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

ALLOWED_HOSTS = ['*']

# Use console email backend during development
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

# Orders are emulated locally unless a gateway backend is forced
PAYMENT_GATEWAY_BACKEND = os.environ.get(  # noqa: F405
    'PAYMENT_GATEWAY_BACKEND', 'apps.payments.gateway.EmulatedGateway'
)
