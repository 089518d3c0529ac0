"""
Tests for MongoDB connection management with the motor client mocked out.

Version: 1.0
"""

import pytest
import pytest_asyncio
from pymongo.errors import ConnectionFailure

from concept_server.db import mongodb


@pytest_asyncio.fixture(autouse=True)
async def reset_connection():
    yield
    await mongodb.close_mongodb_connection()


@pytest.fixture
def motor_client(mocker):
    client = mocker.MagicMock()
    client.admin.command = mocker.AsyncMock(return_value={"ok": 1.0})
    client.__getitem__.return_value = mocker.sentinel.database
    mocker.patch.object(mongodb, "AsyncIOMotorClient", return_value=client)
    return client


@pytest.mark.asyncio
async def test_get_database_connects_lazily(mocker, motor_client):
    database = await mongodb.get_database()

    assert database is mocker.sentinel.database
    motor_client.admin.command.assert_awaited_once_with("ping")
    # Test mode selects the dedicated test database
    motor_client.__getitem__.assert_called_once_with("test-db")

    assert await mongodb.get_database() is database
    motor_client.admin.command.assert_awaited_once()


@pytest.mark.asyncio
async def test_failed_ping(mocker, motor_client):
    motor_client.admin.command = mocker.AsyncMock(side_effect=ConnectionFailure("refused"))

    assert await mongodb.init_mongodb() is False
    motor_client.close.assert_called_once()
    with pytest.raises(ConnectionFailure):
        await mongodb.get_database()


@pytest.mark.asyncio
async def test_close(motor_client):
    await mongodb.init_mongodb()

    await mongodb.close_mongodb_connection()

    motor_client.close.assert_called_once()
    assert mongodb._mongodb_db is None
