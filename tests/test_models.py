"""
Request/response schema tests
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from blog_api.models.post import PostCreateRequest, PostUpdateRequest, PostResponse, join_author_name


def test_author_is_joined_with_a_single_space():
    assert join_author_name({"firstName": "Ada", "lastName": "Lovelace"}) == "Ada Lovelace"


def test_joined_author_is_ambiguous_for_names_with_spaces():
    joined = join_author_name({"firstName": "Mary Ann", "lastName": "Evans"})

    assert joined == "Mary Ann Evans"
    assert len(joined.split(" ")) == 3


def test_response_from_document_flattens_author():
    created = datetime(2021, 1, 2, tzinfo=timezone.utc)
    response = PostResponse.from_document({
        "id": "0d4b6a3e-7a43-4a67-9a0a-2b8b2c1e9f10",
        "author": {"firstName": "A", "lastName": "B"},
        "title": "Title",
        "content": "Body",
        "created": created
    })

    assert response.author == "A B"
    assert set(response.model_dump()) == {"id", "author", "content", "title", "created"}


def test_create_request_requires_author_object():
    with pytest.raises(ValidationError):
        PostCreateRequest(title="T", content="C", author="A B")


def test_create_request_created_is_optional():
    request = PostCreateRequest(title="T", content="C", author={"firstName": "A", "lastName": "B"})

    assert request.created is None
    assert request.author.full_name == "A B"


def test_update_request_requires_id():
    with pytest.raises(ValidationError):
        PostUpdateRequest(title="T")


def test_join_does_not_rewrite_padded_names():
    assert join_author_name({"firstName": " A", "lastName": "B "}) == " A B "


@pytest.mark.parametrize("author", [
    {"firstName": " ", "lastName": "B"},
    {"firstName": "A", "lastName": "\n"},
])
def test_blank_author_names_are_rejected(author):
    with pytest.raises(ValidationError):
        PostCreateRequest(title="T", content="C", author=author)
