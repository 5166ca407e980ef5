"""Tests for CommentThread"""

import pytest

from brotocare.domain.errors import EmptyCommentError


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_comment_rejected(thread, comment_repo, text):
    with pytest.raises(EmptyCommentError) as exc:
        thread.append("CMP-1", "stu-1", text, is_admin_author=False)

    assert exc.value.http_status == 400
    assert comment_repo.comments == []


def test_append_stores_trimmed_text(thread):
    comment = thread.append("CMP-1", "stu-1", "  still broken  ", is_admin_author=False)

    assert comment.comment == "still broken"
    assert comment.comment_id.startswith("CMT-")
    assert comment.is_admin is False


def test_is_admin_stored_as_given(thread):
    comment = thread.append("CMP-1", "adm-1", "Looking into it", is_admin_author=True)
    assert comment.is_admin is True


@pytest.mark.asyncio
async def test_list_returns_whole_thread_in_order(thread):
    thread.append("CMP-1", "stu-1", "first", is_admin_author=False)
    thread.append("CMP-1", "adm-1", "second", is_admin_author=True)
    thread.append("CMP-1", "stu-2", "third", is_admin_author=False)
    thread.append("CMP-2", "stu-1", "elsewhere", is_admin_author=False)

    comments = await thread.list_for("CMP-1")

    assert [c.comment for c in comments] == ["first", "second", "third"]
    assert [c.author_label for c in comments] == ["John Doe", "ADMIN", "Jane Smith"]
    assert comments[0].profile.student_id == "123456"
