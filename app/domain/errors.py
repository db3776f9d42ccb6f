# app/domain/errors.py
"""
Bledy domenowe sklepu.

Serwisy rzucaja je w miejscu wykrycia, warstwa HTTP zamienia je na
status + {"message": ...} (patrz app/api/__init__.py).
"""


class ShopError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ShopError):
    """Koszyk albo uzytkownik nie istnieje."""

    status_code = 404


class InvalidInputError(ShopError):
    """Poprawne zadanie, ktore lamie regule biznesowa."""

    status_code = 400


class ConflictError(ShopError):
    """Naruszenie unikalnosci albo przegrany wyscig o wersje/lock."""

    status_code = 409


class InternalError(ShopError):
    status_code = 500
