# tests/routes/test_search_routes.py
"""
HTTP tests for /api/search.

Covers the response envelopes, query parameter validation, optional auth
and the background history write triggered by authenticated searches.
"""

from datetime import timedelta

from fastapi.testclient import TestClient
import pytest

from blog_search.models.search_history import SearchHistory

from ..conftest import BASE_TIME, auth_headers_for

pytestmark = pytest.mark.integration

SEARCH_URL = "/api/search/"


@pytest.fixture
def react_catalog(author, tech, travel, make_blog, make_tag, make_user):
    react = make_tag("react", "React", "react")
    fan = make_user("Fan")
    make_blog(author=author, category=tech, title="React basics", views=50, tags=[react], likers=[fan])
    make_blog(author=author, category=tech, title="State", content="react context", views=10, tags=[react])
    make_blog(author=author, category=travel, title="Advanced React", views=30)
    make_blog(author=author, category=tech, title="Django", views=999)
    make_blog(author=author, category=travel, title="Flask", views=500)


class TestSearchEndpoint:
    def test_response_envelope(self, client: TestClient, react_catalog):
        response = client.get(SEARCH_URL, params={"q": "react", "sort": "popular", "limit": 2})

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"blogs", "totalPages", "currentPage", "total"}
        assert data["total"] == 3
        assert data["totalPages"] == 2
        assert data["currentPage"] == 1
        assert [b["views"] for b in data["blogs"]] == [50, 30]

    def test_content_summary_shape(self, client: TestClient, react_catalog, author):
        data = client.get(SEARCH_URL, params={"q": "React basics"}).json()

        blog = data["blogs"][0]
        assert blog["title"] == "React basics"
        assert blog["author"] == {"id": author.id, "name": "Ada Writer", "avatar": author.avatar}
        assert blog["category"]["slug"] == "technology"
        assert blog["tags"][0]["displayName"] == "React"
        assert blog["likeCount"] == 1
        assert blog["status"] == "published"
        assert "createdAt" in blog and "publishedAt" in blog

    def test_browse_all_without_params(self, client: TestClient, react_catalog):
        data = client.get(SEARCH_URL).json()

        assert data["total"] == 5
        assert len(data["blogs"]) == 5

    def test_category_and_tags_filters(self, client: TestClient, react_catalog, tech):
        by_category = client.get(SEARCH_URL, params={"category": tech.id}).json()
        by_tags = client.get(SEARCH_URL, params={"tags": "react, ,unknown"}).json()

        assert by_category["total"] == 3
        assert by_tags["total"] == 2

    def test_date_range_params(self, client: TestClient, author, tech, make_blog):
        make_blog(author=author, category=tech, title="January", created_at=BASE_TIME)
        make_blog(author=author, category=tech, title="March", created_at=BASE_TIME + timedelta(days=60))

        data = client.get(SEARCH_URL, params={"startDate": "2024-02-01", "endDate": "2024-12-31"}).json()

        assert [b["title"] for b in data["blogs"]] == ["March"]

    def test_invalid_date_is_400(self, client: TestClient):
        response = client.get(SEARCH_URL, params={"startDate": "yesterday"})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert "startDate" in body["message"]

    @pytest.mark.parametrize("param", ["page", "limit"])
    def test_non_integer_pagination_is_400(self, client: TestClient, param):
        response = client.get(SEARCH_URL, params={param: "abc"})

        assert response.status_code == 400
        assert param in response.json()["message"]

    def test_out_of_range_pagination_is_clamped(self, client: TestClient, react_catalog):
        data = client.get(SEARCH_URL, params={"page": 0, "limit": 0}).json()

        assert data["currentPage"] == 1
        assert len(data["blogs"]) == 1
        assert data["totalPages"] == 5

    def test_page_past_end(self, client: TestClient, react_catalog):
        data = client.get(SEARCH_URL, params={"page": 10, "limit": 2}).json()

        assert data["blogs"] == []
        assert data["total"] == 5
        assert data["totalPages"] == 3

    def test_huge_page_is_empty(self, client: TestClient, react_catalog):
        response = client.get(SEARCH_URL, params={"page": str(10**19)})

        assert response.status_code == 200
        data = response.json()
        assert data["blogs"] == []
        assert data["total"] == 5
        assert data["totalPages"] == 1

    def test_unknown_sort_lenient_by_default(self, client: TestClient, react_catalog):
        assert client.get(SEARCH_URL, params={"sort": "relevance"}).status_code == 200

    def test_unknown_sort_strict(self, client: TestClient, monkeypatch):
        from blog_search.core.config import settings

        monkeypatch.setattr(settings, "search_strict_sort", True)
        response = client.get(SEARCH_URL, params={"sort": "relevance"})

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "sort"}


class TestSearchHistoryRecording:
    def test_authenticated_search_is_recorded(self, client: TestClient, drain, db, reader, reader_headers, react_catalog):
        response = client.get(
            SEARCH_URL,
            params={"q": "react", "tags": "react", "sort": "popular", "startDate": "2024-01-01"},
            headers=reader_headers,
        )
        assert response.status_code == 200
        drain()

        entry = db.query(SearchHistory).filter_by(user_id=reader.id).one()
        assert entry.query_text == "react"
        assert entry.result_count == response.json()["total"]
        assert entry.filters == {
            "category": None,
            "tags": ["react"],
            "author": None,
            "dateRange": {"startDate": "2024-01-01T00:00:00+00:00", "endDate": None},
            "sortBy": "popular",
        }

    def test_anonymous_search_not_recorded(self, client: TestClient, drain, db, react_catalog):
        assert client.get(SEARCH_URL, params={"q": "react"}).status_code == 200
        drain()

        assert db.query(SearchHistory).count() == 0

    def test_invalid_token_searches_anonymously(self, client: TestClient, drain, db, react_catalog):
        response = client.get(
            SEARCH_URL, params={"q": "react"}, headers={"Authorization": "Bearer not-a-jwt"}
        )
        drain()

        assert response.status_code == 200
        assert db.query(SearchHistory).count() == 0

    def test_blank_query_not_recorded(self, client: TestClient, drain, db, reader_headers, react_catalog):
        assert client.get(SEARCH_URL, params={"q": "   "}, headers=reader_headers).status_code == 200
        drain()

        assert db.query(SearchHistory).count() == 0

    def test_history_failure_does_not_fail_search(
        self, client: TestClient, drain, db, reader_headers, react_catalog, monkeypatch
    ):
        from blog_search.repositories.search_history_repository import SearchHistoryRepository

        def broken_create(self, **kwargs):
            raise RuntimeError("history store down")

        monkeypatch.setattr(SearchHistoryRepository, "create", broken_create)

        response = client.get(SEARCH_URL, params={"q": "react"}, headers=reader_headers)
        drain()

        assert response.status_code == 200
        assert response.json()["total"] == 3
        assert db.query(SearchHistory).count() == 0


class TestSuggestionsEndpoint:
    def test_short_query_returns_empty_groups(self, client: TestClient):
        response = client.get("/api/search/suggestions", params={"q": "r"})

        assert response.status_code == 200
        assert response.json() == {
            "suggestions": {"blogs": [], "tags": [], "categories": [], "authors": []}
        }

    def test_grouped_suggestions(self, client: TestClient, react_catalog):
        data = client.get("/api/search/suggestions", params={"q": "rea"}).json()["suggestions"]

        assert {b["title"] for b in data["blogs"]} == {"React basics", "Advanced React"}
        assert data["tags"] == [{"id": data["tags"][0]["id"], "name": "react", "displayName": "React"}]
        assert set(data["blogs"][0]) == {"id", "title", "slug"}

    def test_limit_param(self, client: TestClient, react_catalog):
        data = client.get("/api/search/suggestions", params={"q": "rea", "limit": 1}).json()

        assert len(data["suggestions"]["blogs"]) == 1

    def test_limit_out_of_bounds_is_400(self, client: TestClient):
        response = client.get("/api/search/suggestions", params={"q": "rea", "limit": 500})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestHistoryEndpoints:
    def test_requires_auth(self, client: TestClient):
        get_response = client.get("/api/search/history")
        delete_response = client.delete("/api/search/history")

        assert get_response.status_code == 401
        assert delete_response.status_code == 401
        assert get_response.json()["code"] == "AUTH_REQUIRED"
        assert "message" in get_response.json()

    def test_expired_token_is_401(self, client: TestClient, reader):
        from blog_search.auth import create_access_token

        token = create_access_token({"sub": reader.id}, expires_delta=timedelta(seconds=-5))
        response = client.get("/api/search/history", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_list_own_history(self, client: TestClient, reader, reader_headers, make_user, make_history):
        other = make_user("Other")
        for i in range(3):
            make_history(reader, f"mine {i}", BASE_TIME + timedelta(minutes=i), result_count=i)
        make_history(other, "theirs", BASE_TIME)

        response = client.get("/api/search/history", params={"limit": 2}, headers=reader_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["totalPages"] == 2
        assert data["currentPage"] == 1
        assert [e["query"] for e in data["searchHistory"]] == ["mine 2", "mine 1"]
        assert set(data["searchHistory"][0]) == {"id", "query", "filters", "resultCount", "createdAt"}

    def test_huge_history_page_is_empty(self, client: TestClient, reader, reader_headers, make_history):
        make_history(reader, "only", BASE_TIME)

        response = client.get("/api/search/history", params={"page": str(10**19)}, headers=reader_headers)

        assert response.status_code == 200
        assert response.json()["searchHistory"] == []
        assert response.json()["total"] == 1

    def test_clear_history(self, client: TestClient, db, reader, reader_headers, make_user, make_history):
        other = make_user("Other")
        make_history(reader, "a", BASE_TIME)
        make_history(reader, "b", BASE_TIME)
        make_history(other, "c", BASE_TIME)

        response = client.delete("/api/search/history", headers=reader_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Search history cleared", "deletedCount": 2}
        assert db.query(SearchHistory).filter_by(user_id=reader.id).count() == 0
        assert db.query(SearchHistory).filter_by(user_id=other.id).count() == 1

        listing = client.get("/api/search/history", headers=reader_headers).json()
        assert listing == {"searchHistory": [], "totalPages": 0, "currentPage": 1, "total": 0}

    def test_search_then_history_roundtrip(self, client: TestClient, drain, reader_headers, make_user, react_catalog):
        client.get(SEARCH_URL, params={"q": "django"}, headers=reader_headers)
        drain()

        other_headers = auth_headers_for(make_user("Someone else"))
        mine = client.get("/api/search/history", headers=reader_headers).json()
        theirs = client.get("/api/search/history", headers=other_headers).json()

        assert [e["query"] for e in mine["searchHistory"]] == ["django"]
        assert mine["searchHistory"][0]["resultCount"] == 1
        assert theirs["total"] == 0


def test_health_and_metrics(client: TestClient):
    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"

    client.get(SEARCH_URL)
    metrics = client.get("/metrics")
    assert metrics.status_code == 200
    assert "blog_search_service_operations_total" in metrics.text
