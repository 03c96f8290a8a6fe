"""
Runtime configuration for the Notas Fiscais dashboard.

Settings are read from the environment once, at startup, and handed to the
services and controllers that need them. Nothing reads the environment
later, so tests can build their own `Settings` without touching process
state.
"""

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes"}

_DEFAULT_WEBHOOK_BASE = "https://superia-trading.app.n8n.cloud/webhook"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """
    Immutable application settings.

    Attributes:
        use_demo_data: Serve the bundled demo invoices and members instead
            of calling the webhooks and the auth service.
        invoices_url: Webhook returning pending invoices (and `/counters`,
            `/{id}/xml` below it).
        history_url: Webhook returning the invoice history.
        reprocess_url: Base URL for `POST {numero}/retry`.
        config_doc_url: Webhook listing document configurations.
        pdf_base_url: Public storage prefix for `{qive_id}.pdf`.
        auth_url: Base URL of the hosted auth service (GoTrue).
        auth_anon_key: Public key for sign-in and password flows.
        auth_service_key: Service-role key for member administration.
        app_origin: Public origin used to build invite/reset redirects.
        app_port: Port of the Reflex frontend.
        backend_port: Port of the Reflex backend (event websocket).
    """

    use_demo_data: bool = False
    invoices_url: str = f"{_DEFAULT_WEBHOOK_BASE}/nfs-pendentes"
    history_url: str = f"{_DEFAULT_WEBHOOK_BASE}/nfs-pendentes/historico"
    reprocess_url: str = (
        f"{_DEFAULT_WEBHOOK_BASE}/2549b8a5-a9e0-4855-a8c1-cbe6b9a2db4e/nfs-pendentes"
    )
    config_doc_url: str = f"{_DEFAULT_WEBHOOK_BASE}/get-config-doc-e-conta-de-projeto"
    pdf_base_url: str = ""
    auth_url: str = ""
    auth_anon_key: str = ""
    auth_service_key: str = ""
    app_origin: str = "http://localhost:3000"
    app_port: int = 3000
    backend_port: int = 8000
    http_timeout: float = 15.0
    search_debounce: float = 0.3
    config_doc_ttl: int = 60 * 5
    invoices_page_size: int = 7
    history_page_size: int = 9
    members_page_size: int = 7

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from `NOTAS_UI_*` and `SUPABASE_*` variables."""
        defaults = cls()
        auth_url = os.getenv("SUPABASE_URL", "").rstrip("/")
        return cls(
            use_demo_data=_env_flag("NOTAS_UI_USE_DEMO", "false") or not auth_url,
            invoices_url=os.getenv("NOTAS_UI_INVOICES_URL", defaults.invoices_url),
            history_url=os.getenv("NOTAS_UI_HISTORY_URL", defaults.history_url),
            reprocess_url=os.getenv("NOTAS_UI_REPROCESS_URL", defaults.reprocess_url),
            config_doc_url=os.getenv(
                "NOTAS_UI_CONFIG_DOC_URL", defaults.config_doc_url
            ),
            pdf_base_url=os.getenv(
                "NOTAS_UI_PDF_BASE_URL",
                f"{auth_url}/storage/v1/object/public/nf/files" if auth_url else "",
            ),
            auth_url=auth_url,
            auth_anon_key=os.getenv("SUPABASE_ANON_KEY", ""),
            auth_service_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY", ""),
            app_origin=os.getenv("APP_ORIGIN", defaults.app_origin).rstrip("/"),
            app_port=_env_int("APP_PORT", defaults.app_port),
            backend_port=_env_int("BACKEND_PORT", defaults.backend_port),
            http_timeout=float(_env_int("NOTAS_UI_HTTP_TIMEOUT", 15)),
        )

    def run_args(self) -> list[str]:
        """Arguments for `reflex run` on the configured ports."""
        return [
            "run",
            "--frontend-port",
            str(self.app_port),
            "--backend-port",
            str(self.backend_port),
        ]
