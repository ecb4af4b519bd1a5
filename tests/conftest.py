# tests/conftest.py
from __future__ import annotations

import json
import os
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from nacl.signing import SigningKey
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("USE_TEST_DATABASE", "true")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite://")

from myriad_api.api.v1.dependencies import get_fanout, get_rpc_transport
from myriad_api.core.security import create_access_token, nonce_message
from myriad_api.db.session import Base
from myriad_api.db.session import get_db as app_get_session
from myriad_api.enums import SectionType
from myriad_api.main import app as fastapi_app
from myriad_api.models import Comment, Currency, Network, Post, User
from myriad_api.services.fanout import FanoutQueue
from myriad_api.services.network import SELECTOR_DECIMALS, SELECTOR_NAME, SELECTOR_SYMBOL

TEST_DB_URL = "sqlite://"

CONTRACT = "0x00000000000000000000000000000000000000aa"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite defers BEGIN on its own; take over so SAVEPOINTs roll back correctly.
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    # commit() and rollback() inside the code under test only touch a SAVEPOINT.
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture()
def fanout(db_session: Session) -> FanoutQueue:
    """Fan-out queue whose side effects run in the test session."""

    @contextmanager
    def _test_session_scope() -> Iterator[Session]:
        yield db_session

    return FanoutQueue(session_factory=_test_session_scope, concurrency=4)


@pytest.fixture()
def rpc_transport() -> dict[str, Any]:
    """Holder for an httpx transport tests may install for JSON-RPC calls."""
    return {"transport": None}


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    fanout: FanoutQueue,
    rpc_transport: dict[str, Any],
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_fanout] = lambda: fanout
    app.dependency_overrides[get_rpc_transport] = lambda: rpc_transport["transport"]
    try:
        yield
    finally:
        for dependency in (app_get_session, get_fanout, get_rpc_transport):
            app.dependency_overrides.pop(dependency, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def drain(client: TestClient, fanout: FanoutQueue) -> Callable[[], None]:
    """Wait for side effects scheduled by requests made through ``client``."""

    def _drain() -> None:
        client.portal.call(fanout.drain)

    return _drain


def generate_identity() -> dict[str, Any]:
    signing_key = SigningKey.generate()
    return {
        "signing_key": signing_key,
        "public_key_hex": signing_key.verify_key.encode().hex(),
    }


def sign_nonce(signing_key: SigningKey, nonce: int) -> str:
    """Sign the hex form of ``nonce`` the way a wallet does."""
    return signing_key.sign(nonce_message(nonce)).signature.hex()


def _make_user(db_session: Session, identity: dict[str, Any], name: str) -> User:
    user = User(id=identity["public_key_hex"], name=name, nonce=42)
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def test_user_data() -> dict[str, Any]:
    return generate_identity()


@pytest.fixture()
def other_user_data() -> dict[str, Any]:
    return generate_identity()


@pytest.fixture()
def test_user(db_session: Session, test_user_data: dict[str, Any]) -> User:
    """Create and return a persisted test user."""
    return _make_user(db_session, test_user_data, "alice")


@pytest.fixture()
def other_user(db_session: Session, other_user_data: dict[str, Any]) -> User:
    """Create and return a second persisted user."""
    return _make_user(db_session, other_user_data, "bob")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture()
def network(db_session: Session) -> Network:
    network = Network(id="myriad", chain_id="1", rpc_url="http://rpc.test", image="")
    db_session.add(network)
    db_session.commit()
    return network


@pytest.fixture()
def currency(db_session: Session, network: Network) -> Currency:
    currency = Currency(
        symbol="MYRIA",
        name="Myriad",
        decimal=18,
        native=True,
        network_id=network.id,
    )
    db_session.add(currency)
    db_session.commit()
    return currency


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    def _make(author: User, **values: Any) -> Post:
        post = Post(created_by=author.id, text=values.pop("text", "hello world"), **values)
        db_session.add(post)
        db_session.commit()
        return post

    return _make


@pytest.fixture()
def test_post(make_post: Callable[..., Post], other_user: User) -> Post:
    """A post written by ``other_user`` for ``test_user`` to interact with."""
    return make_post(other_user)


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    def _make(author: User, post: Post, **values: Any) -> Comment:
        comment = Comment(
            user_id=author.id,
            post_id=post.id,
            type=values.pop("type", "post"),
            reference_id=values.pop("reference_id", post.id),
            section=values.pop("section", SectionType.DISCUSSION.value),
            text=values.pop("text", "a comment"),
            **values,
        )
        db_session.add(comment)
        db_session.commit()
        return comment

    return _make


def abi_string(text: str) -> str:
    data = text.encode()
    padded = data.ljust(32 * max(1, (len(data) + 31) // 32), b"\x00")
    return "0x" + (32).to_bytes(32, "big").hex() + len(data).to_bytes(32, "big").hex() + padded.hex()


def token_node(
    symbol: str = "usdt", name: str = "Tether USD", decimals: int = 6, code: str = "0x6080"
) -> Callable[[httpx.Request], httpx.Response]:
    """MockTransport handler answering like a node hosting one ERC-20 contract."""
    answers = {
        SELECTOR_SYMBOL: abi_string(symbol),
        SELECTOR_NAME: abi_string(name),
        SELECTOR_DECIMALS: "0x" + decimals.to_bytes(32, "big").hex(),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if body["method"] == "eth_getCode":
            result = code
        else:
            result = answers[body["params"][0]["data"]]
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

    return handler
