from unittest.mock import MagicMock, patch

import pytest
import requests

from recipe_match.services.recipe_store import RecipeStoreError, RecipeStoreService


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    return response


@pytest.fixture
def store():
    return RecipeStoreService(
        base_url="https://store.example.com/",
        api_key="secret",
        table="recipes",
        timeout=5,
        pool_limit=50,
    )


@patch("recipe_match.services.recipe_store.requests.get")
def test_fetch_recipe_pool(mock_get, store):
    mock_get.return_value = make_response(payload=[
        {"id": 1, "title": "Chicken Rice", "ingredients": ["2 cups rice"], "prep_time": 5, "cook_time": None},
        {"id": "b2", "title": "Salad", "description": None, "tags": None},
    ])

    recipes = store.fetch_recipe_pool()

    assert [r.id for r in recipes] == ["1", "b2"]
    assert recipes[0].total_time == 5
    assert recipes[1].description == ""

    args, kwargs = mock_get.call_args
    assert args[0] == "https://store.example.com/rest/v1/recipes"
    assert kwargs["params"] == {"select": "*", "limit": 50}
    assert kwargs["headers"]["apikey"] == "secret"
    assert kwargs["headers"]["Authorization"] == "Bearer secret"
    assert kwargs["timeout"] == 5


@patch("recipe_match.services.recipe_store.requests.get")
def test_fetch_limit_is_capped(mock_get, store):
    mock_get.return_value = make_response(payload=[])
    store.fetch_recipe_pool(limit=500)
    assert mock_get.call_args.kwargs["params"]["limit"] == 50


@patch("recipe_match.services.recipe_store.requests.get")
def test_malformed_rows_are_skipped(mock_get, store):
    mock_get.return_value = make_response(payload=[
        {"id": 1, "title": "Good"},
        {"id": 2},
        "not a row",
        {"id": 3, "title": "Negative", "prep_time": -5},
    ])
    assert [r.title for r in store.fetch_recipe_pool()] == ["Good"]


@patch("recipe_match.services.recipe_store.requests.get")
def test_client_error_is_not_retried(mock_get, store):
    mock_get.return_value = make_response(status_code=401)
    with pytest.raises(RecipeStoreError):
        store.fetch_recipe_pool()
    assert mock_get.call_count == 1


@patch("recipe_match.services.recipe_store.time.sleep")
@patch("recipe_match.services.recipe_store.requests.get")
def test_timeouts_are_retried_then_raise(mock_get, mock_sleep, store):
    mock_get.side_effect = requests.exceptions.Timeout()
    with pytest.raises(RecipeStoreError):
        store.fetch_recipe_pool()
    assert mock_get.call_count == store.max_retries + 1
    assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2, 4]


@patch("recipe_match.services.recipe_store.time.sleep")
@patch("recipe_match.services.recipe_store.requests.get")
def test_server_error_recovers_on_retry(mock_get, mock_sleep, store):
    mock_get.side_effect = [
        make_response(status_code=503),
        make_response(payload=[{"id": 1, "title": "Soup"}]),
    ]
    assert [r.title for r in store.fetch_recipe_pool()] == ["Soup"]
    assert mock_sleep.call_count == 1


@patch("recipe_match.services.recipe_store.requests.get")
def test_non_list_payload_raises(mock_get, store):
    mock_get.return_value = make_response(payload={"message": "oops"})
    with pytest.raises(RecipeStoreError):
        store.fetch_recipe_pool()


@patch("recipe_match.services.recipe_store.requests.get")
def test_invalid_json_raises_without_retry(mock_get, store):
    response = make_response()
    response.json.side_effect = requests.exceptions.JSONDecodeError("bad", "", 0)
    mock_get.return_value = response
    with pytest.raises(RecipeStoreError):
        store.fetch_recipe_pool()
    assert mock_get.call_count == 1


def test_unconfigured_store_raises():
    store = RecipeStoreService(base_url="", api_key="")
    assert not store.is_configured
    assert not store.check_availability()
    with pytest.raises(RecipeStoreError):
        store.fetch_recipe_pool()


@patch("recipe_match.services.recipe_store.requests.get")
def test_check_availability(mock_get, store):
    mock_get.return_value = make_response(payload=[])
    assert store.check_availability()

    mock_get.side_effect = requests.exceptions.ConnectionError()
    assert not store.check_availability()
