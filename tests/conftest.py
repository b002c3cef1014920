# tests/conftest.py
import copy
from types import SimpleNamespace

import pytest
from jobtrack import create_app


# Columns each table accepts; writes to anything else fail like a PostgREST APIError.
SCHEMA = {
    "users": {
        "id", "username", "name", "email", "password_hash",
        "security_question", "security_answer_hash", "created_at",
    },
    "jobs": {
        "id", "user_id", "company", "role", "pay", "date_applied", "interview_date",
        "job_type", "status", "mode", "notes", "created_at", "updated_at",
    },
}


class UnknownColumnError(Exception):
    pass


class FakeQuery:
    """Enough of the postgrest query builder for the stores under test."""

    def __init__(self, db, table):
        self.db, self.table = db, table
        self.filters, self.action, self.payload = [], "select", None
        self._order, self._limit = None, None

    def select(self, *_cols):
        self.action = "select"
        return self

    def insert(self, row):
        self.action, self.payload = "insert", row
        return self

    def update(self, values):
        self.action, self.payload = "update", values
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, col, value):
        self.filters.append(lambda r: r.get(col) == value)
        return self

    def gte(self, col, value):
        self.filters.append(lambda r: r.get(col) is not None and r.get(col) >= value)
        return self

    def order(self, col, desc=False):
        self._order = (col, desc)
        return self

    def limit(self, n):
        self._limit = n
        return self

    def _check_columns(self):
        allowed = SCHEMA.get(self.table)
        payload = self.payload if isinstance(self.payload, list) else [self.payload]
        unknown = sorted({k for row in payload for k in row} - allowed) if allowed else []
        if unknown:
            raise UnknownColumnError(f"column {unknown[0]!r} of relation {self.table!r} does not exist")

    def execute(self):
        if self.table in self.db.failing:
            raise RuntimeError("store unavailable")
        rows = self.db.tables.setdefault(self.table, [])
        if self.action in ("insert", "update"):
            self._check_columns()
        if self.action == "insert":
            new = [copy.deepcopy(r) for r in (self.payload if isinstance(self.payload, list) else [self.payload])]
            rows.extend(new)
            return SimpleNamespace(data=copy.deepcopy(new))
        hits = [r for r in rows if all(f(r) for f in self.filters)]
        if self.action == "update":
            for r in hits:
                r.update(self.payload)
            return SimpleNamespace(data=copy.deepcopy(hits))
        if self.action == "delete":
            self.db.tables[self.table] = [r for r in rows if r not in hits]
            return SimpleNamespace(data=copy.deepcopy(hits))
        if self._order:
            col, desc = self._order
            hits = sorted(hits, key=lambda r: r.get(col) or "", reverse=desc)
        if self._limit is not None:
            hits = hits[: self._limit]
        return SimpleNamespace(data=copy.deepcopy(hits))


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.failing = set()

    def table(self, name):
        return FakeQuery(self, name)


class FakeOpenAI:
    """Returns queued replies in order; an Exception instance is raised instead."""

    def __init__(self):
        self.replies = []
        self.prompts = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, model, messages, **_):
        self.prompts.append(messages[-1]["content"])
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=reply))])


@pytest.fixture
def supabase():
    return FakeSupabase()

@pytest.fixture
def ai():
    return FakeOpenAI()

@pytest.fixture
def app(supabase, ai):
    return create_app("test", SUPABASE=supabase, OPENAI_CLIENT=ai)

@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c

def signup(client, username="alice", email=None, password="s3cret!"):
    r = client.post("/api/auth/signup", json={
        "username": username,
        "name": username.title(),
        "email": email or f"{username}@example.com",
        "password": password,
        "securityQuestion": "First pet?",
        "securityAnswer": "rex",
    })
    assert r.status_code == 201, r.get_json()
    return r.get_json()

@pytest.fixture
def auth_headers(client):
    token = signup(client)["token"]
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture
def signup_user(client):
    def _signup(**kwargs):
        return signup(client, **kwargs)
    return _signup
