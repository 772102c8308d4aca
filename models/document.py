# models/document.py
# Чтение полей сохраненного документа с проверкой типов.
# Любое несоответствие - TypeError/ValueError, снимок считается поврежденным.


def text(doc, key):
    value = doc[key]
    if not isinstance(value, str):
        raise TypeError(f'{key} must be a string')
    return value


def optional_text(doc, key, default=None):
    value = doc.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise TypeError(f'{key} must be a string or null')
    return value


def text_list(doc, key, required=False):
    value = doc[key] if required else doc.get(key)
    if value is None and not required:
        return ()
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise TypeError(f'{key} must be a list of strings')
    return tuple(value)


def choice(doc, key, choices, default=None):
    value = doc.get(key) if default is not None else doc[key]
    if value is None:
        return default
    if value not in choices:
        raise ValueError(f'{key} has unknown value {value!r}')
    return value


def number(doc, key, default=None):
    value = doc.get(key, default) if default is not None else doc[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f'{key} must be a number')
    return value


def flag(doc, key, default):
    value = doc.get(key, default)
    if not isinstance(value, bool):
        raise TypeError(f'{key} must be true or false')
    return value
