"""Shared base for API tests: in-memory SQLite, temp storage dir, TestClient with overridden dependencies."""

import shutil
import tempfile
import unittest
from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.database import enable_sqlite_foreign_keys, get_db
from app.core.security import hash_password
from app.main import app
from app.models import Base, Comment, Post, User

API = "/api/v1"
PASSWORD = "password1"
# Hash once; bcrypt at cost 12 is deliberately slow.
PASSWORD_HASH = hash_password(PASSWORD)


class ApiTestCase(unittest.TestCase):
    """Each test gets a fresh database and storage directory."""

    settings_overrides: dict[str, Any] = {}

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        event.listen(self.engine, "connect", enable_sqlite_foreign_keys)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

        self.storage_dir = tempfile.mkdtemp()
        self.settings = Settings(
            DATABASE_URL="sqlite://",
            STORAGE_ROOT=self.storage_dir,
            **self.settings_overrides,
        )

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(app, raise_server_exceptions=False)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()
        shutil.rmtree(self.storage_dir, ignore_errors=True)

    # --- data helpers -------------------------------------------------

    def create_user(
        self,
        email: str = "owner@teamwork.io",
        name: str = "Owner",
        is_admin: bool = False,
    ) -> int:
        with self.Session() as db:
            user = User(name=name, email=email, password_hash=PASSWORD_HASH, is_admin=is_admin)
            db.add(user)
            db.commit()
            return user.id

    def create_post(self, user_id: int, title: str = "Hello", **kwargs: Any) -> int:
        fields = {"content": "Some content", "type": "article"}
        fields.update(kwargs)
        with self.Session() as db:
            post = Post(title=title, user_id=user_id, **fields)
            db.add(post)
            db.commit()
            return post.id

    def create_comment(self, user_id: int, post_id: int, text: str = "Nice post") -> int:
        with self.Session() as db:
            comment = Comment(comment=text, user_id=user_id, post_id=post_id)
            db.add(comment)
            db.commit()
            return comment.id

    def get_user(self, user_id: int) -> User | None:
        with self.Session() as db:
            user = db.get(User, user_id)
            if user is not None:
                db.expunge(user)
            return user

    def get_post(self, post_id: int) -> Post | None:
        with self.Session() as db:
            post = db.get(Post, post_id)
            if post is not None:
                db.expunge(post)
            return post

    def get_comment(self, comment_id: int) -> Comment | None:
        with self.Session() as db:
            comment = db.get(Comment, comment_id)
            if comment is not None:
                db.expunge(comment)
            return comment

    # --- auth helpers -------------------------------------------------

    def login(self, email: str, password: str = PASSWORD) -> dict[str, str]:
        """Log in through the API and return Authorization headers."""
        resp = self.client.post(f"{API}/login", json={"email": email, "password": password})
        self.assertEqual(resp.status_code, 200, resp.text)
        return {"Authorization": f"Bearer {resp.json()['data']['token']}"}

    def user_with_token(
        self,
        email: str = "owner@teamwork.io",
        name: str = "Owner",
        is_admin: bool = False,
    ) -> tuple[int, dict[str, str]]:
        user_id = self.create_user(email=email, name=name, is_admin=is_admin)
        return user_id, self.login(email)
