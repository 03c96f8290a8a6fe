"""
Demo notas in the raw shapes the webhooks return.

Pending notas use the legacy Portuguese keys and history notas the current
ones, so the demo service exercises the same parsing as production.
"""

from datetime import datetime, timedelta

_PENDING_ROWS = [
    ("03/03/2025", "Empresa LTDA", 123456789, 3293.29, "pendente", "Api fora do ar"),
    ("02/03/2025", "Distribuidora XYZ LTDA", 987654321, 1567.80, "em_processamento", "-"),
    ("28/02/2025", "Indústria 123", 789123456, 4123.67, "pendente", "Cliente não localizado"),
    ("27/02/2025", "Atacado & Varejo", 321654987, 1234.56, "em_processamento", "-"),
    ("26/02/2025", "Comércio Local SA", 789456123, 2345.67, "pendente", "Documento inválido"),
    ("25/02/2025", "Suprimentos Gerais", 654789321, 5432.10, "em_processamento", "-"),
    ("24/02/2025", "Transportes Rápidos LTDA", 147258369, 3789.45, "pendente", "Endereço não encontrado"),
    ("23/02/2025", "Equipamentos Industriais", 963258741, 7890.12, "em_processamento", "-"),
    ("22/02/2025", "Materiais Pesados LTDA", 852741963, 10234.56, "pendente", "Dados incompletos"),
    ("21/02/2025", "Elétrica & Hidráulica SA", 369852147, 2987.65, "em_processamento", "-"),
    ("20/02/2025", "Ferramentas Profissionais", 741852963, 6543.21, "pendente", "Erro na validação"),
    ("19/02/2025", "Produtos Químicos LTDA", 159357486, 8765.43, "em_processamento", "-"),
    ("18/02/2025", "Alimentos Orgânicos", 258369147, 3214.76, "pendente", "Produto não entregue"),
    ("17/02/2025", "Tecnologia Avançada", 753951468, 12345.67, "em_processamento", "-"),
    ("16/02/2025", "Serviços Digitais SA", 654123789, 4321.09, "pendente", "Sistema indisponível"),
]

_HISTORY_ROWS = [
    (4521, "2025-03-01", "12345678000190", "11222333000181", 1890.00, "finalized", None),
    (4522, "2025-02-28", "Logística Brasil LTDA", "11222333000181", 2450.35, "recorded", None),
    (4523, "2025-02-27", "98765432000110", "11222333000262", 760.10, "saved", "Aguardando aprovação fiscal"),
    (4524, "2025-02-26", "Papelaria Central", "11222333000181", 312.90, "identified", None),
    (4525, "2025-02-25", "45678912000134", "11222333000262", 15320.00, "error", "Conta de projeto inexistente"),
    (4526, "2025-02-24", "Construtora Horizonte SA", "11222333000181", 98400.75, "finalized", None),
    (4527, "2025-02-21", "Gráfica Rápida", "11222333000343", 1280.00, "finalized", None),
    (4528, "2025-02-20", "32165498000155", "11222333000181", 5400.00, "recorded", None),
    (4529, "2025-02-19", "Segurança Total LTDA", "11222333000262", 8900.45, "saved", None),
    (4530, "2025-02-18", "Consultoria Ágil", "11222333000181", 22000.00, "finalized", "Reprocessada manualmente"),
    (4531, "2025-02-17", "Manutenção Predial", "11222333000343", 3100.00, "em_análise", None),
]

_CREATED_BASE = datetime(2025, 3, 3, 18, 0, 0)


def _created_at(index: int) -> str:
    return (_CREATED_BASE - timedelta(hours=index)).strftime("%Y-%m-%dT%H:%M:%SZ")


DEMO_PENDING_PAYLOAD: list[dict] = [
    {
        "id": str(index + 1),
        "data_emissao": emitted,
        "cnpj_prestador": counterparty,
        "numero_nf": numero,
        "valor_total": total,
        "status": status,
        "motivos_pendencia": {"motivo": reason},
        "created_at": _created_at(index),
        "qive_id": f"demo-{numero}",
    }
    for index, (emitted, counterparty, numero, total, status, reason) in enumerate(
        _PENDING_ROWS
    )
]

DEMO_HISTORY_PAYLOAD: list[dict] = [
    {
        "id": f"h{numero}",
        "numero": numero,
        "emission_date": emitted,
        "counterparty_cnpj": counterparty,
        "filCnpj": branch,
        "value": total,
        "status": status,
        "obs": note,
        "created_at": f"{emitted}T12:00:00Z",
        "qive_id": f"demo-{numero}",
    }
    for numero, emitted, counterparty, branch, total, status, note in _HISTORY_ROWS
]

DEMO_COUNTERS_PAYLOAD: dict = {
    "resumo_status": {
        "pendente": sum(1 for row in _PENDING_ROWS if row[4] == "pendente"),
        "em_processamento": sum(
            1 for row in _PENDING_ROWS if row[4] == "em_processamento"
        ),
    }
}

DEMO_CONFIG_DOCS_PAYLOAD: dict = {
    "data": [
        {
            "gcdCod": 101,
            "gcdDesNome": "Serviços Tomados",
            "filCod": "001",
            "contas_de_projeto": [
                {"ctpCod": 9001, "ctpDesNome": "Projeto Expansão Sul"},
                {"ctpCod": 9002, "ctpDesNome": "Manutenção Corrente"},
            ],
        },
        {
            "gcdCod": 102,
            "gcdDesNome": "Materiais de Consumo",
            "filCod": "001",
            "contas_de_projeto": [],
        },
    ]
}
