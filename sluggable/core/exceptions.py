"""
Exceções do Sluggable
=====================
"""


class ConfigurationError(Exception):
    """
    Configuração de sluggable inválida.

    Levantada quando `method` não é None nem callable, quando `reserved`
    não é None, lista ou callable, ou quando `build_from` aponta para um
    campo que o model não possui. Não há retry: o erro sobe direto para
    quem chamou.
    """
