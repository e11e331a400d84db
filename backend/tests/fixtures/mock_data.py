"""
Mock data fixtures for backend tests
"""

# Column identifiers and their expected (plain, initialism) candidates
MOCK_IDENTIFIERS = {
    "user_id": ("UserId", "UserID"),
    "http_url": ("HttpUrl", "HTTPURL"),
    "first_name": ("FirstName", "FirstName"),
    "api_key_uuid": ("ApiKeyUuid", "APIKeyUUID"),
    "created_at": ("CreatedAt", "CreatedAt"),
    "id": ("Id", "ID"),
    "USER_ID": ("UserId", "UserID"),
    "ip_address": ("IpAddress", "IPAddress"),
    "utf8_name": ("Utf8Name", "UTF8Name"),
    "user__id": ("UserId", "UserID"),
    "_user": ("User", "User"),
    "user_": ("User", "User"),
    "identity": ("Identity", "Identity"),
}

# Schema and rows for the sqlite integration tests
MOCK_USERS_DDL = """
CREATE TABLE users (
    user_id INTEGER PRIMARY KEY,
    first_name TEXT NOT NULL,
    home_url TEXT,
    score REAL,
    is_active INTEGER NOT NULL,
    created_at TEXT NOT NULL,
    api_token BLOB
)
"""

MOCK_USERS_ROWS = [
    (1, "Ahmet", "https://example.com/ahmet", 91.5, 1, "2025-01-01 10:00:00", b"tok-1"),
    (2, "Zeynep", None, None, 0, "2025-01-02 10:00:00", None),
    (3, "Mehmet", "https://example.com/mehmet", 77.25, 1, "2025-01-03 08:30:00", b"tok-3"),
]
