"""
Conversão de valores legados
============================
Converte o valor textual de uma coluna de slug antiga (hstore ou JSON)
em dict locale -> slug.
"""

import json
import re

HSTORE_PAIR_RE = re.compile(
    r'\s*"((?:[^"\\]|\\.)*)"\s*=>\s*(?:"((?:[^"\\]|\\.)*)"|(NULL))\s*(?:,|$)',
    re.IGNORECASE,
)


def _unescape(value: str) -> str:
    return re.sub(r'\\(.)', r'\1', value)


def hstore_to_dict(value) -> dict:
    """
    Converte hstore/JSON em dict.

    Args:
        value: texto no formato `"en"=>"hello", "fr"=>NULL`, texto JSON de
            um objeto, um dict ou None

    Returns:
        dict com as chaves na ordem em que aparecem

    Examples:
        >>> hstore_to_dict('"en"=>"hello", "fr"=>"bonjour"')
        {'en': 'hello', 'fr': 'bonjour'}
        >>> hstore_to_dict('{"en": "hello"}')
        {'en': 'hello'}
    """
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)

    text = str(value).strip()
    if not text:
        return {}

    if text.startswith("{"):
        parsed = json.loads(text)
        if not isinstance(parsed, dict):
            raise ValueError(f"Valor JSON não é um objeto: {text!r}")
        return parsed

    result = {}
    position = 0
    while position < len(text):
        match = HSTORE_PAIR_RE.match(text, position)
        if not match:
            raise ValueError(f"hstore inválido na posição {position}: {text!r}")

        key, raw_value, null = match.groups()
        result[_unescape(key)] = None if null else _unescape(raw_value)
        position = match.end()

    return result
