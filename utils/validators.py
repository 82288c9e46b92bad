import re

PASSWORD_RULES = {
    "length": lambda p: len(p) >= 8,
    "upper": lambda p: re.search(r"[A-Z]", p) is not None,
    "lower": lambda p: re.search(r"[a-z]", p) is not None,
    "number": lambda p: re.search(r"[0-9]", p) is not None,
    "special": lambda p: re.search(r"[\W_]", p) is not None,
}

def password_checks(password: str) -> dict:
    """Per-rule pass/fail map, shown to the user while they type."""
    password = password or ""
    return {name: rule(password) for name, rule in PASSWORD_RULES.items()}

def is_password_valid(password: str) -> bool:
    return all(password_checks(password).values())
