"""Name inflection helpers used to derive resource paths and reference names."""

import re

_camel_boundary = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def underscore(name: str) -> str:
    """CamelCase -> snake_case ("EventContact" -> "event_contact")."""
    return _camel_boundary.sub("_", name).lower()


def pluralize(word: str) -> str:
    """Naive English plural, enough for resource names."""
    if re.search(r"[^aeiou]y$", word):
        return word[:-1] + "ies"
    if re.search(r"(s|x|z|ch|sh)$", word):
        return word + "es"
    return word + "s"


def singularize(word: str) -> str:
    """Inverse of pluralize for the forms it produces."""
    if word.endswith("ies"):
        return word[:-3] + "y"
    if re.search(r"(s|x|z|ch|sh)es$", word):
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word
