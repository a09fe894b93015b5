"""
Configuración centralizada de la aplicación.

Este módulo maneja todas las variables de entorno y configuraciones
del gateway de comercio usando Pydantic Settings para validación automática.
Los valores se resuelven una sola vez al iniciar el proceso.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Ruta relativa del endpoint GraphQL de la Storefront API
SHOPIFY_GRAPHQL_API_ENDPOINT = "/api/{version}/graphql.json"


def ensure_starts_with(value: str, prefix: str) -> str:
    """Agrega el prefijo si el valor no lo tiene."""
    return value if value.startswith(prefix) else f"{prefix}{value}"


class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic Settings.

    Todas las configuraciones se cargan desde variables de entorno
    con valores por defecto apropiados para desarrollo.
    """

    # === CONFIGURACIÓN BÁSICA DE LA APP ===
    APP_NAME: str = "Storefront Commerce Gateway"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # === CONFIGURACIÓN DEL SERVIDOR ===
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)
    WORKERS: int = Field(default=1)
    LOG_LEVEL: str = Field(default="INFO")

    # === CONFIGURACIÓN DE SEGURIDAD ===
    ALLOWED_HOSTS: Optional[List[str]] = Field(default=None)

    # === CONFIGURACIÓN DEL SITIO ===
    SITE_NAME: str = Field(default="Storefront")
    COMPANY_NAME: Optional[str] = Field(default=None)

    # === CONFIGURACIÓN DE SHOPIFY STOREFRONT ===
    SHOPIFY_STORE_DOMAIN: str = Field(default="your-shop.myshopify.com")
    SHOPIFY_STOREFRONT_ACCESS_TOKEN: str = Field(default="your-storefront-access-token")
    SHOPIFY_API_VERSION: str = Field(default="2024-10")
    # Secreto compartido para ?secret= en el endpoint de revalidación
    SHOPIFY_REVALIDATION_SECRET: Optional[str] = Field(default=None)
    # Secreto HMAC de webhooks (X-Shopify-Hmac-Sha256)
    SHOPIFY_WEBHOOK_SECRET: Optional[str] = Field(default=None)
    SHOPIFY_REQUEST_TIMEOUT: float = Field(default=30.0)
    SHOPIFY_CONNECT_TIMEOUT: float = Field(default=10.0)

    # === CONFIGURACIÓN DEL CATÁLOGO ===
    HIDDEN_PRODUCT_TAG: str = Field(default="nextjs-frontend-hidden")
    HIDDEN_COLLECTION_PREFIX: str = Field(default="hidden")
    DEFAULT_CURRENCY_CODE: str = Field(default="USD")
    MENU_HANDLE: str = Field(default="nextjs-frontend-menu")

    # === CONFIGURACIÓN DEL CARRITO ===
    CART_COOKIE_NAME: str = Field(default="cartId")

    # === CONFIGURACIÓN DE CACHE ===
    CACHE_BACKEND: str = Field(default="memory")
    CACHE_TTL_SECONDS: Optional[int] = Field(default=None)
    CACHE_KEY_PREFIX: str = Field(default="storefront")

    # === CONFIGURACIÓN DE REDIS ===
    REDIS_URL: Optional[str] = Field(default=None)
    REDIS_MAX_CONNECTIONS: int = Field(default=10)
    REDIS_SOCKET_TIMEOUT: int = Field(default=5)

    # === CONFIGURACIÓN DE LOGGING ===
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # === CONFIGURACIÓN DE MONITOREO ===
    SLOW_REQUEST_THRESHOLD: float = Field(default=5.0)

    # === CONFIGURACIÓN DE DOCUMENTACIÓN ===
    ENABLE_DOCS: bool = Field(default=True)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "allow",
    }

    @field_validator("ALLOWED_HOSTS", mode="before")
    @classmethod
    def parse_allowed_hosts(cls, v):
        """Parsea ALLOWED_HOSTS como lista separada por comas."""
        if isinstance(v, str):
            return [host.strip() for host in v.split(",") if host.strip()]
        return v

    @field_validator("SHOPIFY_STORE_DOMAIN")
    @classmethod
    def validate_store_domain(cls, v):
        """Normaliza el dominio de la tienda sin barra final."""
        v = v.strip()
        if not v:
            raise ValueError("SHOPIFY_STORE_DOMAIN no puede estar vacío")
        return v.rstrip("/")

    @field_validator("CACHE_BACKEND")
    @classmethod
    def validate_cache_backend(cls, v):
        """Valida que el backend de cache sea soportado."""
        valid_backends = ["memory", "redis", "none"]
        if v.lower() not in valid_backends:
            raise ValueError(f"CACHE_BACKEND debe ser uno de: {valid_backends}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Valida que el nivel de log sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL debe ser uno de: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Valida que el entorno sea válido."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT debe ser uno de: {valid_envs}")
        return v.lower()

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v):
        """Valida que el puerto esté en rango válido."""
        if not 1 <= v <= 65535:
            raise ValueError("PORT debe estar entre 1 y 65535")
        return v

    @property
    def is_production(self) -> bool:
        """Verifica si está en entorno de producción."""
        return self.ENVIRONMENT == "production"

    @property
    def store_domain(self) -> str:
        """Dominio de la tienda siempre con esquema https://."""
        domain = self.SHOPIFY_STORE_DOMAIN
        if domain.startswith("http://"):
            return domain
        return ensure_starts_with(domain, "https://")

    @property
    def storefront_graphql_url(self) -> str:
        """Genera la URL completa del endpoint GraphQL de la Storefront API."""
        return f"{self.store_domain}{SHOPIFY_GRAPHQL_API_ENDPOINT.format(version=self.SHOPIFY_API_VERSION)}"

    @property
    def redis_config(self) -> dict:
        """Genera configuración para Redis."""
        if not self.REDIS_URL:
            return {}

        return {
            "url": self.REDIS_URL,
            "max_connections": self.REDIS_MAX_CONNECTIONS,
            "socket_timeout": self.REDIS_SOCKET_TIMEOUT,
            "decode_responses": True,
        }

    def get_storefront_headers(self) -> dict:
        """
        Obtiene headers para requests a la Storefront API.

        Returns:
            dict: Headers de autenticación
        """
        return {
            "Content-Type": "application/json",
            "X-Shopify-Storefront-Access-Token": self.SHOPIFY_STOREFRONT_ACCESS_TOKEN,
            "User-Agent": f"{self.APP_NAME}/{self.APP_VERSION}",
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Obtiene instancia singleton de configuración.

    Usa LRU cache para evitar recrear la configuración
    múltiples veces durante la ejecución.

    Returns:
        Settings: Instancia de configuración
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Recarga la configuración (útil para testing).

    Returns:
        Settings: Nueva instancia de configuración
    """
    get_settings.cache_clear()
    return get_settings()


def validate_required_settings(current: Optional[Settings] = None) -> bool:
    """
    Valida que todas las configuraciones requeridas estén presentes.

    Returns:
        bool: True si todas las configuraciones están presentes

    Raises:
        ValueError: Si alguna configuración requerida falta
    """
    current = current or get_settings()

    required_fields = [
        "SHOPIFY_STORE_DOMAIN",
        "SHOPIFY_STOREFRONT_ACCESS_TOKEN",
        "SHOPIFY_API_VERSION",
    ]

    missing_fields = []
    for field in required_fields:
        value = getattr(current, field, None)
        if not value or (isinstance(value, str) and not value.strip()):
            missing_fields.append(field)

    if missing_fields:
        raise ValueError(f"Configuraciones requeridas faltantes: {missing_fields}")

    if current.CACHE_BACKEND == "redis" and not current.REDIS_URL:
        raise ValueError("CACHE_BACKEND=redis requiere REDIS_URL")

    return True

