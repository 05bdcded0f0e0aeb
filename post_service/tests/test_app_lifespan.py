from __future__ import annotations

from unittest.mock import patch

from bson import ObjectId
from fastapi.testclient import TestClient

from common.mongo.client import MongoConnection
from post_service.app.config import AppConfig
from post_service.app.main import create_app


def test_lifespan_wires_mongo_into_repository_and_closes_it(
    app_config: AppConfig,
) -> None:
    post_id = ObjectId()

    with patch("common.mongo.client.MongoClient") as client_cls:
        mongo_client = client_cls.return_value
        database = mongo_client.get_default_database.return_value
        collection = database.__getitem__.return_value
        collection.find.return_value = [{"_id": post_id, "title": "from mongo"}]

        app = create_app(app_config)
        with TestClient(app) as client:
            assert isinstance(app.state.mongo, MongoConnection)
            client_cls.assert_called_once_with(app_config.mongo.uri)
            mongo_client.admin.command.assert_called_once_with("ping")

            resp = client.get("/posts")

            assert resp.status_code == 200
            assert resp.json()[0]["id"] == str(post_id)
            assert resp.json()[0]["title"] == "from mongo"
            database.__getitem__.assert_called_with("posts")
            collection.find.assert_called_once_with({})
            mongo_client.close.assert_not_called()

    mongo_client.close.assert_called_once()
