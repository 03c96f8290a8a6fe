"""Demo accounts in the auth service's admin user-object shape."""

DEMO_USERS_PAYLOAD: dict = {
    "users": [
        {
            "id": "c1b7d1de-0000-4000-8000-000000000001",
            "email": "ana.souza@superia.com.br",
            "user_metadata": {"display_name": "Ana Souza", "role": "admin"},
            "email_confirmed_at": "2025-01-10T12:00:00Z",
            "created_at": "2025-01-10T11:58:00Z",
            "last_sign_in_at": "2025-03-03T09:12:00Z",
        },
        {
            "id": "c1b7d1de-0000-4000-8000-000000000002",
            "email": "bruno.lima@superia.com.br",
            "user_metadata": {"display_name": "Bruno Lima", "role": "user"},
            "email_confirmed_at": "2025-01-15T08:30:00Z",
            "created_at": "2025-01-15T08:20:00Z",
            "last_sign_in_at": "2025-02-27T17:45:00Z",
        },
        {
            "id": "c1b7d1de-0000-4000-8000-000000000003",
            "email": "carla.mendes@superia.com.br",
            "user_metadata": {"display_name": "Carla Mendes", "role": "user"},
            "email_confirmed_at": None,
            "created_at": "2025-02-20T14:00:00Z",
            "last_sign_in_at": None,
        },
        {
            "id": "c1b7d1de-0000-4000-8000-000000000004",
            "email": "diego.alves@superia.com.br",
            "user_metadata": {"display_name": "Diego Álves", "role": "gestor"},
            "email_confirmed_at": "2025-02-01T10:00:00Z",
            "created_at": "2025-02-01T09:55:00Z",
            "last_sign_in_at": "2025-03-01T08:00:00Z",
        },
        {
            "id": "c1b7d1de-0000-4000-8000-000000000005",
            "email": "elisa.rocha@superia.com.br",
            "user_metadata": {},
            "email_confirmed_at": None,
            "created_at": "2025-03-02T16:40:00Z",
            "last_sign_in_at": None,
        },
    ]
}

DEMO_PASSWORD = "demo1234"
