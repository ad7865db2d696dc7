"""Parse tolerante do corpo enviado pelo OCI Notifications.

O OCI às vezes manda o ``alarmSummary`` com aspas literais sem escape
(``"alarmSummary": "texto "entre aspas" aqui"``), o que não é JSON válido.
Quando o parse estrito falha, o corpo passa por um reparo e é parseado de
novo. O reparo nunca roda em JSON válido.
"""
import json
import logging
import re

from .constants import RAW_BODY_LOG_CHARS
from .errors import EmptyBody, UnrepairableJson

logger = logging.getLogger(__name__)

_WHITESPACE = " \t\r\n"
_DIGITS = "0123456789"
_LITERALS = ("true", "false", "null")
_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}

# Vírgula seguida da próxima chave de objeto
_NEXT_KEY = re.compile(r'\s*,\s*"(?:[^"\\]|\\.)*"\s*:')
# Fim real do valor de um campo: próxima chave, fechamento de objeto/array ou fim do texto
_FIELD_END = re.compile(r'(?:\s*,\s*"(?:[^"\\]|\\.)*"\s*:|\s*[}\]]|\s*\Z)')


def _skip_whitespace(text, pos):
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    return pos


def _starts_value(text, pos):
    if pos >= len(text):
        return False
    ch = text[pos]
    if ch in '"{[-' or ch in _DIGITS:
        return True
    for literal in _LITERALS:
        if text.startswith(literal, pos):
            after = _skip_whitespace(text, pos + len(literal))
            if after >= len(text) or text[after] in ',}]':
                return True
    return False


def _is_closing_quote(text, pos, context):
    """``text[pos]`` é uma aspa dentro de string: ela fecha a string?

    ``context`` é 'key', 'object' (valor de chave), 'array' ou 'top'.
    """
    nxt = _skip_whitespace(text, pos + 1)
    if nxt >= len(text):
        return True
    ch = text[nxt]
    if context == 'key':
        return ch == ':'
    if context == 'object':
        return ch == '}' or bool(_NEXT_KEY.match(text, pos + 1))
    if context == 'array':
        return ch == ']' or (ch == ',' and _starts_value(text, _skip_whitespace(text, nxt + 1)))
    return False


def escape_stray_quotes(text):
    """Escapa aspas dentro de strings que não fecham a string.

    Uma aspa dentro de string só fecha a string se o que vem depois for
    compatível com a posição da string: ``:`` para chaves, ``}`` ou a próxima
    ``,"chave":`` para valores de objeto, ``]`` ou ``,<valor>`` em arrays, e
    fim do texto em qualquer caso. Caracteres de controle crus dentro de
    strings também são escapados.
    """
    out = []
    stack = []
    expect_key = False
    context = None
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if context is None:
            out.append(ch)
            if ch == '"':
                top = stack[-1] if stack else None
                if top == '{':
                    context = 'key' if expect_key else 'object'
                    expect_key = False
                else:
                    context = 'array' if top == '[' else 'top'
            elif ch in '{[':
                stack.append(ch)
                expect_key = ch == '{'
            elif ch in '}]':
                if stack:
                    stack.pop()
                expect_key = False
            elif ch == ',':
                expect_key = bool(stack) and stack[-1] == '{'
            elif ch == ':':
                expect_key = False
            i += 1
            continue

        if ch == '\\' and i + 1 < n:
            out.append(text[i:i + 2])
            i += 2
            continue
        if ch == '"':
            if _is_closing_quote(text, i, context):
                out.append(ch)
                context = None
            else:
                out.append('\\"')
        elif ord(ch) < 0x20:
            out.append(_CONTROL_ESCAPES.get(ch, '\\u%04x' % ord(ch)))
        else:
            out.append(ch)
        i += 1
    return ''.join(out)


def escape_field_quotes(text, field_name):
    """Segundo passe, só no valor de ``field_name``.

    O valor termina na primeira aspa não escapada seguida de outra chave,
    ``}``/``]`` ou fim do texto; toda aspa não escapada antes dela é escapada.
    """
    opener = re.compile(r'"%s"\s*:\s*"' % re.escape(field_name))
    out = []
    last = 0
    for match in opener.finditer(text):
        start = match.end()
        if start < last:
            continue
        end = None
        escapes = []
        i = start
        while i < len(text):
            ch = text[i]
            if ch == '\\':
                i += 2
                continue
            if ch == '"':
                if _FIELD_END.match(text, i + 1):
                    end = i
                    break
                escapes.append(i)
            i += 1
        if end is None:
            continue
        out.append(text[last:start])
        cursor = start
        for pos in escapes:
            out.append(text[cursor:pos])
            out.append('\\"')
            cursor = pos + 1
        out.append(text[cursor:end])
        last = end
    out.append(text[last:])
    return ''.join(out)


def repair_json(text):
    repaired = escape_stray_quotes(text)
    return escape_field_quotes(repaired, 'alarmSummary')


def parse_alarm_body(raw):
    """Converte o corpo cru em valor JSON (qualquer tipo, sem validação de schema).

    Levanta ``EmptyBody`` para corpo vazio e ``UnrepairableJson`` (com a
    mensagem do primeiro parse) se nem o reparo resolver.
    """
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode('utf-8', errors='replace')
    if raw is None or not raw.strip():
        raise EmptyBody()

    logger.debug("Received raw body (first %d chars): %s", RAW_BODY_LOG_CHARS, raw[:RAW_BODY_LOG_CHARS])
    logger.debug("Body length: %d", len(raw))

    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        original_error = str(exc)
        logger.warning("JSON parsing error: %s (around: %r)", original_error, raw[max(exc.pos - 20, 0):exc.pos + 20])

    logger.info("Attempting to fix malformed JSON...")
    repaired = repair_json(raw)
    try:
        data = json.loads(repaired)
    except json.JSONDecodeError as exc:
        logger.error("Failed to fix JSON: %s", exc)
        raise UnrepairableJson(original_error) from exc

    logger.info("Successfully fixed and parsed JSON")
    return data
