"""测试公共 fixture：临时数据库、上传目录、登录会话。"""
import os
import shutil
import tempfile

# 必须在导入 goal_tracker 之前配置环境变量
_TEST_ROOT = tempfile.mkdtemp(prefix="goal_tracker_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_ROOT, 'bootstrap.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["FRONTEND_DIST_DIR"] = os.path.join(_TEST_ROOT, "no-frontend")
os.environ["APP_URL"] = "https://goals.example.com"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"
os.environ["SESSION_SECRET"] = "test-session-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from goal_tracker.config import get_settings
from goal_tracker.core.security import create_session_token
from goal_tracker.database import enable_sqlite_foreign_keys, get_db, init_db
from goal_tracker.main import app
from goal_tracker.models import User

BASE_URL = "https://testserver"


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)


@pytest.fixture
def engine(tmp_path):
    """每个测试使用独立的 SQLite 数据库"""
    test_engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(test_engine)
    init_db(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def db_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(db_factory):
    session = db_factory()
    yield session
    session.close()


@pytest.fixture(autouse=True)
def override_db(db_factory):
    """让所有请求走测试数据库"""

    def _get_test_db():
        session = db_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client():
    return TestClient(app, base_url=BASE_URL)


@pytest.fixture
def make_user(db):
    """创建用户"""

    def _make_user(user_id: str, email: str | None = None, ads_removed: bool = False) -> User:
        user = User(
            id=user_id,
            email=email or f"{user_id}@example.com",
            name=f"User {user_id}",
            picture=f"https://example.com/{user_id}.png",
            ads_removed=ads_removed,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def login():
    """返回已携带会话 cookie 的客户端"""

    def _login(user: User) -> TestClient:
        client = TestClient(app, base_url=BASE_URL)
        token = create_session_token(
            {"id": user.id, "email": user.email, "name": user.name, "picture": user.picture}
        )
        # cookiejar 对无点号主机名使用 "<host>.local" 作为域，保持一致以便登出时能清除
        client.cookies.set(get_settings().session_cookie_name, token, domain="testserver.local")
        return client

    return _login


@pytest.fixture
def alice(make_user):
    return make_user("google-alice")


@pytest.fixture
def bob(make_user):
    return make_user("google-bob")


@pytest.fixture
def alice_client(login, alice):
    return login(alice)


@pytest.fixture
def bob_client(login, bob):
    return login(bob)
