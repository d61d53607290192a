"""
User-visible message catalog.

Every `message` field returned to clients is looked up here so the API
speaks the deployment's language (MESSAGE_LANGUAGE). Spanish is the default
because the site is Spanish-language.
"""

from typing import Dict

from helpcenter.config import settings

CATALOG: Dict[str, Dict[str, str]] = {
    "es": {
        "report_created": "Reporte enviado exitosamente. Gracias por tu contribución.",
        "report_missing_fields": "Tipo de incidente, gravedad y descripción son obligatorios.",
        "report_failed": "Error interno del servidor al procesar el reporte.",
        "user_created": "Usuario registrado exitosamente.",
        "user_updated": "Perfil actualizado exitosamente.",
        "user_missing_fields": "El nombre y el email son obligatorios.",
        "user_email_conflict": "El email ya está registrado.",
        "user_not_found": "Usuario no encontrado.",
        "user_failed": "Error interno del servidor al procesar el usuario.",
        "article_not_found": "Artículo no encontrado.",
        "article_failed": "Error interno del servidor al obtener el artículo.",
        "auth_required": "Debes iniciar sesión para continuar.",
        "logged_out": "Sesión cerrada.",
        "invalid_request": "La solicitud no es válida.",
        "internal_error": "Error interno del servidor. Inténtalo de nuevo más tarde.",
        "github_missing_email": "No se pudo obtener el email de GitHub.",
        "google_missing_email": "No se pudo obtener el email de Google.",
    },
    "en": {
        "report_created": "Report submitted successfully. Thank you for your contribution.",
        "report_missing_fields": "Incident type, severity and description are required.",
        "report_failed": "Internal server error while processing the report.",
        "user_created": "User registered successfully.",
        "user_updated": "Profile updated successfully.",
        "user_missing_fields": "Name and email are required.",
        "user_email_conflict": "That email is already registered.",
        "user_not_found": "User not found.",
        "user_failed": "Internal server error while processing the user.",
        "article_not_found": "Article not found.",
        "article_failed": "Internal server error while loading the article.",
        "auth_required": "You must sign in to continue.",
        "logged_out": "Signed out.",
        "invalid_request": "The request is not valid.",
        "internal_error": "Internal server error. Please try again later.",
        "github_missing_email": "Could not obtain an email address from GitHub.",
        "google_missing_email": "Could not obtain an email address from Google.",
    },
}


def msg(key: str) -> str:
    """Return the message for `key` in the configured language."""
    return CATALOG[settings.message_language][key]
