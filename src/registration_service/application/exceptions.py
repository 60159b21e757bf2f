from __future__ import annotations


class AppError(Exception):
    """Base application error.

    ``detail`` is the public message returned to the caller.
    """

    default_detail = ""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(AppError):
    default_detail = "No encontrado"


class ConflictError(AppError):
    pass


class DuplicateEmailError(ConflictError):
    default_detail = "El email ya existe"


class ValidationError(AppError):
    pass


class InvalidFieldsError(ValidationError):
    default_detail = "Datos inválidos"

    def __init__(self, fields: dict[str, list[str]], detail: str = "") -> None:
        self.fields = fields
        super().__init__(detail)


class MissingAvatarError(ValidationError):
    default_detail = "Falta la imagen de avatar"


class ConsentRequiredError(ValidationError):
    default_detail = "Debe aceptar términos"


class UnsupportedMediaTypeError(ValidationError):
    default_detail = "Tipo de archivo no permitido"


class PayloadTooLargeError(ValidationError):
    default_detail = "El archivo supera el tamaño máximo permitido"


class MalformedBodyError(ValidationError):
    default_detail = "Cuerpo de la petición inválido"


class PersistenceError(AppError):
    """Storage backend failure. ``detail`` is never exposed to callers."""

    default_detail = "Error de persistencia"
