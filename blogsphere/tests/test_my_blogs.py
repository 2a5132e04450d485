import pytest
from httpx import AsyncClient
from sqlalchemy.orm.exc import StaleDataError

from blogsphere.constants import BlogMessages, MyBlogMessages
from blogsphere.exceptions import ConcurrencyConflictError
from blogsphere.services.blog_service import BlogService
from blogsphere.services.interaction_service import InteractionService
from blogsphere.services.my_blog_service import MyBlogService

MY_BLOGS_URL = "/api/v1/my-blogs"


@pytest.mark.asyncio
async def test_list_my_blogs_includes_drafts(test_client: AsyncClient, make_user, make_blog, auth_headers):
    author, other = await make_user(), await make_user()
    draft = await make_blog(author, published=False)
    published = await make_blog(author, categories=["gaming"])
    await make_blog(other)

    response = await test_client.get(f"{MY_BLOGS_URL}/all-blogs", headers=auth_headers(author))

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == MyBlogMessages.ALL_BLOGS_FETCHED
    assert [b["id"] for b in data["blogs"]] == [published.id, draft.id]


@pytest.mark.asyncio
async def test_list_my_blogs_when_empty(test_client: AsyncClient, make_user, auth_headers):
    author = await make_user()

    response = await test_client.get(f"{MY_BLOGS_URL}/all-blogs", headers=auth_headers(author))

    assert response.status_code == 200
    assert response.json()["blogs"] == []
    assert response.json()["message"] == MyBlogMessages.NO_BLOGS_FOUND


@pytest.mark.asyncio
async def test_get_my_blog_shows_block_list(test_client: AsyncClient, make_user, make_blog, auth_headers):
    author, target = await make_user(), await make_user()
    blog = await make_blog(author)
    await test_client.patch(f"/api/v1/blog/block/{blog.id}", json={"user_id": target.id}, headers=auth_headers(author))

    response = await test_client.get(f"{MY_BLOGS_URL}/blog/{blog.id}", headers=auth_headers(author))

    assert response.status_code == 200
    assert response.json()["blog"]["blocked_users"] == [target.id]


@pytest.mark.asyncio
async def test_update_is_a_merge_patch(test_client: AsyncClient, make_user, make_blog, auth_headers):
    author = await make_user()
    blog = await make_blog(author, title="Original", categories=["food"])

    response = await test_client.put(
        f"{MY_BLOGS_URL}/update-blog/{blog.id}",
        json={"content": "Rewritten", "tags": ["edit"], "title": None},
        headers=auth_headers(author),
    )

    assert response.status_code == 200
    updated = response.json()["blog"]
    assert response.json()["message"] == MyBlogMessages.BLOG_UPDATED
    assert updated["title"] == "Original"
    assert updated["content"] == "Rewritten"
    assert updated["tags"] == ["edit"]
    assert updated["categories"] == ["food"]


@pytest.mark.asyncio
async def test_update_rejects_blank_title_and_content(test_client: AsyncClient, make_user, make_blog, auth_headers):
    author = await make_user()
    blog = await make_blog(author, title="Original")
    headers = auth_headers(author)

    blank_title = await test_client.put(
        f"{MY_BLOGS_URL}/update-blog/{blog.id}", json={"title": "   "}, headers=headers
    )
    blank_content = await test_client.put(
        f"{MY_BLOGS_URL}/update-blog/{blog.id}", json={"content": "  "}, headers=headers
    )
    stored = await test_client.get(f"{MY_BLOGS_URL}/blog/{blog.id}", headers=headers)

    assert blank_title.status_code == 422
    assert blank_content.status_code == 422
    assert stored.json()["blog"]["title"] == "Original"
    assert stored.json()["blog"]["content"] == "Some content"


@pytest.mark.asyncio
async def test_update_categories_changes_who_sees_the_blog(test_client: AsyncClient, make_user, make_blog, auth_headers):
    author, traveller = await make_user(), await make_user(preferences=["travel"])
    blog = await make_blog(author, categories=["food"])

    response = await test_client.put(
        f"{MY_BLOGS_URL}/update-blog/{blog.id}",
        json={"categories": ["travel", "food"]},
        headers=auth_headers(author),
    )
    feed = await test_client.get("/api/v1/blog/all-blogs", headers=auth_headers(traveller))

    assert response.status_code == 200
    assert response.json()["blog"]["categories"] == ["travel", "food"]
    assert [b["id"] for b in feed.json()["blogs"]] == [blog.id]


@pytest.mark.asyncio
async def test_update_revalidates_categories(test_client: AsyncClient, make_user, make_blog, auth_headers):
    author = await make_user()
    blog = await make_blog(author)

    response = await test_client.put(
        f"{MY_BLOGS_URL}/update-blog/{blog.id}", json={"categories": []}, headers=auth_headers(author)
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_non_author_cannot_touch_blog(test_client: AsyncClient, make_user, make_blog, auth_headers):
    author, intruder = await make_user(), await make_user()
    blog = await make_blog(author, title="Mine")
    headers = auth_headers(intruder)

    responses = [
        await test_client.get(f"{MY_BLOGS_URL}/blog/{blog.id}", headers=headers),
        await test_client.put(f"{MY_BLOGS_URL}/update-blog/{blog.id}", json={"title": "Theirs"}, headers=headers),
        await test_client.patch(f"{MY_BLOGS_URL}/publish-status/{blog.id}", json={"is_published": False}, headers=headers),
        await test_client.delete(f"{MY_BLOGS_URL}/blog/{blog.id}", headers=headers),
    ]

    for response in responses:
        assert response.status_code == 404
        assert response.json() == {"detail": BlogMessages.BLOG_NOT_FOUND}

    still_there = await test_client.get(f"{MY_BLOGS_URL}/blog/{blog.id}", headers=auth_headers(author))
    assert still_there.json()["blog"]["title"] == "Mine"
    assert still_there.json()["blog"]["is_published"] is True


@pytest.mark.asyncio
async def test_publish_and_unpublish(test_client: AsyncClient, make_user, make_blog, auth_headers):
    author, fan = await make_user(), await make_user()
    blog = await make_blog(author, published=False)
    await test_client.patch(f"/api/v1/blog/like/{blog.id}", headers=auth_headers(author))

    published = await test_client.patch(
        f"{MY_BLOGS_URL}/publish-status/{blog.id}", json={"isPublished": True}, headers=auth_headers(author)
    )
    assert published.status_code == 200
    assert published.json()["message"] == MyBlogMessages.BLOG_PUBLISHED
    assert published.json()["blog"]["is_published"] is True
    assert published.json()["blog"]["like_count"] == 1

    visible = await test_client.get(f"/api/v1/blog/blogs/{blog.id}", headers=auth_headers(fan))
    assert visible.status_code == 200

    unpublished = await test_client.patch(
        f"{MY_BLOGS_URL}/publish-status/{blog.id}", json={"is_published": False}, headers=auth_headers(author)
    )
    assert unpublished.json()["message"] == MyBlogMessages.BLOG_UNPUBLISHED

    hidden = await test_client.get(f"/api/v1/blog/blogs/{blog.id}", headers=auth_headers(fan))
    assert hidden.status_code == 404


@pytest.mark.asyncio
async def test_publish_status_must_be_boolean(test_client: AsyncClient, make_user, make_blog, auth_headers):
    author = await make_user()
    blog = await make_blog(author, published=False)

    response = await test_client.patch(
        f"{MY_BLOGS_URL}/publish-status/{blog.id}", json={"is_published": "yes"}, headers=auth_headers(author)
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_delete_blog(test_client: AsyncClient, make_user, make_blog, auth_headers):
    author, fan = await make_user(), await make_user()
    blog = await make_blog(author)
    await test_client.patch(f"/api/v1/blog/like/{blog.id}", headers=auth_headers(fan))

    deleted = await test_client.delete(f"{MY_BLOGS_URL}/blog/{blog.id}", headers=auth_headers(author))
    again = await test_client.delete(f"{MY_BLOGS_URL}/blog/{blog.id}", headers=auth_headers(author))

    assert deleted.status_code == 200
    assert deleted.json()["message"] == MyBlogMessages.BLOG_DELETED
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_publish_conflicts_with_concurrent_like(test_db, session_factory, make_user, make_blog, monkeypatch):
    author, reader = await make_user(), await make_user()
    blog = await make_blog(author)
    blog_id, reader_id = blog.id, reader.id
    real_commit = test_db.commit

    async def commit_after_a_like():
        async with session_factory() as other:
            await InteractionService(other).like(reader_id, blog_id)
        await real_commit()

    monkeypatch.setattr(test_db, "commit", commit_after_a_like)

    with pytest.raises(ConcurrencyConflictError):
        await MyBlogService(test_db).set_published(author, blog_id, False)

    async with session_factory() as fresh:
        stored = await BlogService(fresh).get_blog(blog_id)
    assert stored.is_published is True
    assert stored.like_count == 1


@pytest.mark.asyncio
async def test_delete_reports_stale_write_as_conflict(test_db, make_user, make_blog, monkeypatch):
    author = await make_user()
    blog = await make_blog(author)

    async def stale_commit():
        raise StaleDataError("blogs row changed underneath")

    monkeypatch.setattr(test_db, "commit", stale_commit)

    with pytest.raises(ConcurrencyConflictError):
        await MyBlogService(test_db).delete(author, blog.id)
