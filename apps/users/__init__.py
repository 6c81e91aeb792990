"""Users app package.

Defines the custom user model (email login, ``user``/``host`` roles) used as
AUTH_USER_MODEL throughout the project, plus the register/login API.
"""
