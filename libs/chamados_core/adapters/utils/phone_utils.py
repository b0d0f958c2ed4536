from __future__ import annotations

import re

import phonenumbers
from phonenumbers import NumberParseException


def only_digits(s: str | None) -> str:
    return re.sub(r"\D+", "", s or "")


def _br_basic_normalize(d: str) -> str | None:
    """
    Fallback simples focado no Brasil:
      - remove prefixos '00' e '0'
      - aceita 10-11 dígitos como DDD+número
      - prefixa 55
      - rejeita <10
    """
    d = only_digits(d)
    if not d:
        return None

    if d.startswith("00"):
        d = d[2:]

    # trunk '0' antes do DDD
    while d.startswith("0"):
        d = d[1:]

    if d.startswith("55") and 12 <= len(d) <= 13:  # noqa: PLR2004
        return d

    # DDD + número (10=fixo, 11=móvel)
    if len(d) in (10, 11):
        return "55" + d

    return None


def normalize_phone(raw: str | None, default_region: str = "BR") -> str | None:
    """
    Retorna o número em formato internacional, só dígitos ('5511987654321').

    Dois cadastros com '(11) 98765-4321' e '+55 11 98765-4321' resultam
    no mesmo valor, o que permite detectar WhatsApp duplicado.
    """
    if not raw:
        return None

    try:
        num = phonenumbers.parse(raw, default_region)
    except NumberParseException:
        return _br_basic_normalize(raw)

    if not phonenumbers.is_possible_number(num):
        return _br_basic_normalize(raw)

    digits = only_digits(phonenumbers.format_number(num, phonenumbers.PhoneNumberFormat.E164))
    if not (10 <= len(digits) <= 15):  # noqa: PLR2004
        return None
    return digits


def last4(raw: str | None) -> str:
    return only_digits(raw)[-4:]
