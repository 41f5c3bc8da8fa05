"""
Exceptions personnalisées pour Puter Proxy.

Chaque exception porte son code HTTP et sait se rendre en JSON:
la route n'a plus qu'à renvoyer `to_response()`.
"""


class PuterProxyError(Exception):
    """Exception de base pour toutes les erreurs du proxy."""

    status_code = 500

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or "unknown_error"
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"[{self.code}] {self.message} - Détails: {self.details}"
        return f"[{self.code}] {self.message}"

    def to_response(self) -> dict:
        """Corps JSON renvoyé à l'appelant."""
        return {"error": self.message}


class MethodNotAllowedError(PuterProxyError):
    """Verbe HTTP entrant autre que POST."""

    status_code = 405

    def __init__(self, method: str = None):
        super().__init__(
            message="Method not allowed",
            code="method_not_allowed",
            details={"method": method} if method else {}
        )


class ConfigurationError(PuterProxyError):
    """Erreur de configuration (token absent, fichier invalide)."""

    status_code = 500

    def __init__(self, message: str, config_key: str = None):
        super().__init__(
            message=message,
            code="config_error",
            details={"key": config_key} if config_key else {}
        )


class UnknownCategoryError(PuterProxyError):
    """Premier segment du chemin non reconnu."""

    status_code = 400

    def __init__(self, category: str = None):
        super().__init__(
            message="Unknown category",
            code="unknown_category",
            details={"category": category} if category else {}
        )


class UnsupportedMethodError(PuterProxyError):
    """Catégorie connue mais méthode non mappée."""

    status_code = 400

    def __init__(self, category: str, method: str = None):
        super().__init__(
            message="Unsupported method",
            code="unsupported_method",
            details={"category": category, "method": method}
        )


class InvalidBodyError(PuterProxyError):
    """Body entrant illisible (JSON invalide) ou trop volumineux."""

    status_code = 400

    def __init__(self, message: str = "Invalid JSON body", status_code: int = 400):
        super().__init__(message=message, code="invalid_body")
        self.status_code = status_code


class UpstreamError(PuterProxyError):
    """Échec pendant l'appel Puter ou le relais de sa réponse."""

    status_code = 500

    def __init__(self, message: str, endpoint: str = None):
        super().__init__(
            message="Proxy error",
            code="proxy_error",
            details={"endpoint": endpoint} if endpoint else {}
        )
        self.reason = message

    def to_response(self) -> dict:
        return {"error": self.message, "details": self.reason}
