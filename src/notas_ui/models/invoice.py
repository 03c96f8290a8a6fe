"""
Invoice (nota fiscal) domain models and payload parsing.

Invoices arrive from the ingestion webhooks as loosely shaped JSON. Older
payloads use Portuguese keys (`numero_nf`, `cnpj_prestador`,
`valor_total`, `motivos_pendencia.motivo`) while current ones use
`numero`, `counterparty_cnpj`, `filCnpj` and `obs`. Parsing accepts both
and never raises: anything unusable degrades to an empty collection or to
an `UNKNOWN` status.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping

from benedict import benedict

from notas_ui.lib import logs

LOG = logs.logger(__file__)


class InvoiceStatus(str, Enum):
    """Lifecycle states reported by the ingestion backend."""

    PENDING = "pending"
    PROCESSING = "processing"
    APPROVED = "approved"
    REJECTED = "rejected"
    IDENTIFIED = "identified"
    SAVED = "saved"
    RECORDED = "recorded"
    FINALIZED = "finalized"
    ERROR = "error"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "InvoiceStatus":
        """Map a raw backend status onto the enum, falling back to UNKNOWN."""
        if not isinstance(value, str):
            return cls.UNKNOWN
        return _STATUS_ALIASES.get(value.strip().lower(), cls.UNKNOWN)


_STATUS_ALIASES: dict[str, InvoiceStatus] = {
    **{status.value: status for status in InvoiceStatus},
    "pendente": InvoiceStatus.PENDING,
    "em_processamento": InvoiceStatus.PROCESSING,
    "aprovado": InvoiceStatus.APPROVED,
    "recusado": InvoiceStatus.REJECTED,
    "reprovado": InvoiceStatus.REJECTED,
    "rejeitado": InvoiceStatus.REJECTED,
    "finalizada": InvoiceStatus.FINALIZED,
    "completa": InvoiceStatus.FINALIZED,
    "erro": InvoiceStatus.ERROR,
}
_STATUS_ALIASES.pop(InvoiceStatus.UNKNOWN.value)


@dataclass(frozen=True, slots=True)
class StatusDisplay:
    """Badge label and colour tone for a status."""

    label: str
    tone: str


_STATUS_DISPLAY: dict[InvoiceStatus, StatusDisplay] = {
    InvoiceStatus.PENDING: StatusDisplay("Pendente", "yellow"),
    InvoiceStatus.PROCESSING: StatusDisplay("Em processamento", "blue"),
    InvoiceStatus.APPROVED: StatusDisplay("Aprovado", "green"),
    InvoiceStatus.REJECTED: StatusDisplay("Recusado", "red"),
    InvoiceStatus.IDENTIFIED: StatusDisplay("Identificada", "cyan"),
    InvoiceStatus.SAVED: StatusDisplay("Salva", "indigo"),
    InvoiceStatus.RECORDED: StatusDisplay("Gravada", "violet"),
    InvoiceStatus.FINALIZED: StatusDisplay("Finalizada", "green"),
    InvoiceStatus.ERROR: StatusDisplay("Erro", "red"),
}


def status_display(status: InvoiceStatus, raw_status: str = "") -> StatusDisplay:
    """
    Return the badge for a status.

    Unrecognised statuses render as a neutral badge labelled with the raw
    backend value so operators still see what the backend sent.
    """
    display = _STATUS_DISPLAY.get(status)
    if display is not None:
        return display
    return StatusDisplay(raw_status.strip() or "Desconhecido", "gray")


@dataclass(slots=True)
class InvoiceRecord:
    """One nota fiscal as listed by the dashboard."""

    id: str
    numero: int | str | None = None
    emission_date: str | None = None
    counterparty_cnpj: str | None = None
    branch_cnpj: str | None = None
    total: Decimal | None = None
    status: InvoiceStatus = InvoiceStatus.UNKNOWN
    raw_status: str = ""
    note: str | None = None
    created_at: str | None = None
    qive_id: str | None = None

    @property
    def display(self) -> StatusDisplay:
        return status_display(self.status, self.raw_status)

    @property
    def has_pdf(self) -> bool:
        """Identified invoices have no stored PDF yet."""
        return bool(self.qive_id) and self.status is not InvoiceStatus.IDENTIFIED


@dataclass(frozen=True, slots=True)
class ProjectAccount:
    """A project account ("conta de projeto") under a document configuration."""

    code: int
    name: str


@dataclass(frozen=True, slots=True)
class ConfigDocument:
    """A document configuration the backend may apply when reprocessing."""

    code: int
    name: str
    branch_code: str = ""
    project_accounts: tuple[ProjectAccount, ...] = ()

    @property
    def label(self) -> str:
        return self.name or f"Configuração {self.code}"


@dataclass(slots=True)
class ReprocessRequest:
    """
    Body of a reprocessing request.

    Only the reason is mandatory; optional fields are sent when present.
    """

    reason: str
    process: str = ""
    observations: str | None = None
    config_doc_code: int | None = None
    project_account_code: int | None = None
    config_doc_name: str = ""

    def to_payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {"motivo": self.reason}
        if self.process:
            body["processo"] = self.process
        if self.observations is not None:
            body["observacoes"] = self.observations
        if self.config_doc_code is not None:
            body["config_doc"] = self.config_doc_code
        if self.project_account_code is not None:
            body["conta_de_projeto"] = self.project_account_code
        if self.config_doc_name:
            body["gcdDesNome"] = self.config_doc_name
        return body


@dataclass(slots=True)
class StatusCounters:
    """Per-status invoice counts shown above the pending list."""

    counts: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def count(self, status: InvoiceStatus) -> int:
        return self.counts.get(status.value, 0)


def parse_invoice(payload: Mapping[str, Any]) -> InvoiceRecord | None:
    """
    Parse one webhook object into an InvoiceRecord.

    Returns None for objects without an identifier, which the dashboard
    cannot act on.
    """
    b = _as_benedict(payload)
    numero = _to_numero(_first(b, "numero", "numero_nf"))
    identifier = _first(b, "id", "qive_id")
    if identifier is None and numero is None:
        return None
    raw_status = b.get("status")
    return InvoiceRecord(
        id=str(identifier if identifier is not None else numero),
        numero=numero,
        emission_date=_to_text(_first(b, "emission_date", "data_emissao")),
        counterparty_cnpj=_to_text(_first(b, "counterparty_cnpj", "cnpj_prestador")),
        branch_cnpj=_to_text(b.get("filCnpj")),
        total=_to_decimal(_first(b, "valor_total", "total", "value")),
        status=InvoiceStatus.parse(raw_status),
        raw_status=raw_status if isinstance(raw_status, str) else "",
        note=_to_note(_first(b, "obs", "motivos_pendencia.motivo", "motivo")),
        created_at=_to_text(b.get("created_at")),
        qive_id=_to_text(b.get("qive_id")),
    )


def parse_invoices(payload: Any) -> list[InvoiceRecord]:
    """
    Parse a webhook response into invoice records.

    Accepts a bare array or an object wrapping it under `notas` or `data`.
    An empty array, a single empty object or any other shape yields [].
    """
    items = _unwrap_collection(payload, "notas", "data")
    if not items:
        return []
    if len(items) == 1 and isinstance(items[0], Mapping) and not items[0]:
        return []
    records = [
        record
        for record in (
            parse_invoice(item) for item in items if isinstance(item, Mapping)
        )
        if record is not None
    ]
    skipped = len(items) - len(records)
    if skipped:
        LOG.warning("Skipped %d malformed invoice objects", skipped)
    return records


def parse_counters(payload: Any) -> StatusCounters:
    """Parse `{"resumo_status": {status: count}}`; other shapes are empty."""
    if not isinstance(payload, Mapping):
        return StatusCounters()
    summary = payload.get("resumo_status")
    if not isinstance(summary, Mapping):
        return StatusCounters()
    counts: dict[str, int] = {}
    for raw_status, value in summary.items():
        try:
            amount = int(value)
        except (TypeError, ValueError):
            continue
        status = InvoiceStatus.parse(raw_status)
        key = status.value if status is not InvoiceStatus.UNKNOWN else str(raw_status)
        counts[key] = counts.get(key, 0) + amount
    return StatusCounters(counts=counts)


def parse_config_documents(payload: Any) -> list[ConfigDocument]:
    """Parse the document-configuration lookup (array or `{"data": [...]}`)."""
    documents = []
    for item in _unwrap_collection(payload, "data"):
        if not isinstance(item, Mapping):
            continue
        code = _to_int(item.get("gcdCod"))
        if code is None:
            continue
        accounts = tuple(
            ProjectAccount(code=account_code, name=str(account.get("ctpDesNome") or ""))
            for account in item.get("contas_de_projeto") or []
            if isinstance(account, Mapping)
            and (account_code := _to_int(account.get("ctpCod"))) is not None
        )
        documents.append(
            ConfigDocument(
                code=code,
                name=str(item.get("gcdDesNome") or ""),
                branch_code=str(item.get("filCod") or ""),
                project_accounts=accounts,
            )
        )
    return documents


def _unwrap_collection(payload: Any, *keys: str) -> list:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for key in keys:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []


def _as_benedict(payload: Mapping[str, Any]) -> benedict:
    try:
        return benedict(dict(payload), keyattr_dynamic=True)
    except ValueError:
        # keys containing "." cannot be addressed by keypath
        return benedict(dict(payload), keypath_separator=None)


def _first(b: benedict, *keys: str) -> Any:
    for key in keys:
        value = b.get(key)
        if value is not None and value != "":
            return value
    return None


def _to_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _to_note(value: Any) -> str | None:
    text = _to_text(value)
    return None if text == "-" else text


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_numero(value: Any) -> int | str | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    if text.isdecimal():
        try:
            return int(text)
        except ValueError:
            return text
    return text


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return _finite(Decimal(str(value)))
    text = str(value).replace("R$", "").strip()
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    try:
        return _finite(Decimal(text))
    except InvalidOperation:
        return None


def _finite(value: Decimal) -> Decimal | None:
    return value if value.is_finite() else None

