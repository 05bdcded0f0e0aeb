from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from pymongo.errors import ConfigurationError, ServerSelectionTimeoutError

from common.mongo.client import MongoConnection


def test_connect_uses_default_database_from_uri() -> None:
    with patch("common.mongo.client.MongoClient") as client_cls:
        client = client_cls.return_value
        connection = MongoConnection("mongodb://localhost:27017/blog_app2")

        db = connection.connect()

    client_cls.assert_called_once_with("mongodb://localhost:27017/blog_app2")
    client.admin.command.assert_called_once_with("ping")
    assert db is client.get_default_database.return_value
    assert connection.database is db


def test_connect_prefers_explicit_db_name() -> None:
    with patch("common.mongo.client.MongoClient") as client_cls:
        client = client_cls.return_value
        connection = MongoConnection("mongodb://localhost:27017", db_name="other")

        connection.connect()

    client.__getitem__.assert_called_once_with("other")
    client.get_default_database.assert_not_called()


def test_ping_failure_is_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    with patch("common.mongo.client.MongoClient") as client_cls:
        client_cls.return_value.admin.command.side_effect = (
            ServerSelectionTimeoutError("no servers")
        )
        connection = MongoConnection("mongodb://localhost:27017/blog_app2")

        with caplog.at_level("ERROR", logger="common.mongo.client"):
            connection.connect()

    assert "MongoDB connection error" in caplog.text


def test_missing_database_name_fails() -> None:
    with patch("common.mongo.client.MongoClient") as client_cls:
        client = client_cls.return_value
        client.get_default_database.side_effect = ConfigurationError("no default")
        connection = MongoConnection("mongodb://localhost:27017")

        with pytest.raises(RuntimeError, match="MONGO_DB_NAME"):
            connection.connect()

    client.close.assert_called_once()


def test_close_resets_state() -> None:
    with patch("common.mongo.client.MongoClient") as client_cls:
        connection = MongoConnection("mongodb://localhost:27017/blog_app2")
        connection.connect()
        connection.close()

    client_cls.return_value.close.assert_called_once()
    with pytest.raises(RuntimeError):
        _ = connection.database
