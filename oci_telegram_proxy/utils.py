import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal

# Precisão suficiente para quantizar qualquer float finito em 1 casa decimal
_DECIMAL_CONTEXT = Context(prec=400)
_ONE_DECIMAL = Decimal("0.1")

# Prefixo numérico no estilo parseFloat: "87.456", " 12", "40%", "1e3ms"
_NUMBER_PREFIX = re.compile(r'^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)')


def _is_present(value):
    # Falsy (None, "", 0, [], {}) conta como ausente, igual ao payload original
    return bool(value)


def get_field(obj, key):
    """Retorna ``obj[key]`` se ``obj`` for um dict, senão None."""
    if isinstance(obj, dict):
        return obj.get(key)
    return None


def first_item(value):
    """Primeiro elemento de uma lista não vazia, senão None."""
    if isinstance(value, list) and value:
        return value[0]
    return None


def text_field(obj, key):
    """Campo escalar como texto, ou None se ausente/vazio/de tipo estrutural."""
    value = get_field(obj, key)
    if isinstance(value, (dict, list)) or not _is_present(value):
        return None
    if isinstance(value, bool):
        return "true"
    return str(value)


def pick_first_nonempty(*candidates):
    for c in candidates:
        if _is_present(c) and not isinstance(c, (dict, list)):
            return str(c)
    return None


def parse_metric_number(value):
    """Converte um valor de métrica em float; None se não for número finito."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMBER_PREFIX.match(value)
        if not match:
            return None
        number = float(match.group(1))
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def format_metric_value(value, unit):
    # Empate exato (12.25, -1.25) arredonda para longe do zero, como toFixed(1)
    exact = Decimal(float(value))
    rounded = exact.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP, context=_DECIMAL_CONTEXT)
    return f"{rounded}{unit}"


def truncate_text(text, max_chars, marker="..."):
    # Conta code points do str (não bytes, nem grafemas)
    if len(text) > max_chars:
        return text[:max_chars] + marker
    return text
