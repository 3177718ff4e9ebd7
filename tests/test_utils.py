"""유틸리티 테스트 — 페이지 검증, 정렬 절, id 파싱, 로그 마스킹.

Utility tests for pagination helpers, id parsing, and log masking.
"""

import uuid

import pytest

from app.middleware.axiom_logging import _error_detail, _mask
from app.models.content import Video
from app.utils.exceptions import BadRequestError
from app.utils.ids import parse_id
from app.utils.pagination import build_order_by, validate_page

SORTABLE = {"views": Video.views, "title": Video.title}


class TestPagination:
    """페이지네이션 헬퍼 테스트."""

    def test_offset(self):
        """offset = (page - 1) * limit."""
        assert validate_page(3, 10).offset == 20

    @pytest.mark.parametrize("page,limit", [(0, 10), (-1, 10), (1, 0), (1, 101)])
    def test_out_of_range(self, page, limit):
        """범위를 벗어난 page/limit은 400."""
        with pytest.raises(BadRequestError):
            validate_page(page, limit)

    def test_order_by_appends_id_tie_break(self):
        """정렬 키 뒤에 같은 방향의 id 타이브레이크."""
        clauses = build_order_by(SORTABLE, Video.id, "views", "ASC")
        assert [str(c) for c in clauses] == ["videos.views ASC", "videos.id ASC"]

    def test_unknown_sort_key(self):
        """허용되지 않은 정렬 키는 400."""
        with pytest.raises(BadRequestError):
            build_order_by(SORTABLE, Video.id, "owner_id", "asc")


class TestParseId:
    """id 파싱 테스트."""

    def test_valid(self):
        value = uuid.uuid4()
        assert parse_id(str(value), "video") == value

    @pytest.mark.parametrize("raw", ["", None, "123", "not-a-uuid"])
    def test_invalid(self, raw):
        """빈 값 또는 형식 오류는 400."""
        with pytest.raises(BadRequestError):
            parse_id(raw, "video")


class TestLogMasking:
    """로그 마스킹 테스트."""

    def test_sensitive_keys_masked(self):
        """비밀번호/토큰 필드 마스킹, 중첩 포함."""
        masked = _mask({
            "username": "alice",
            "password": "secret",
            "nested": {"refresh_token": "abc", "ok": 1},
        })
        assert masked == {"username": "alice", "password": "***", "nested": {"refresh_token": "***", "ok": 1}}

    def test_long_strings_truncated(self):
        """긴 문자열은 잘림."""
        assert _mask("x" * 5000).endswith("...(truncated)")

    def test_error_detail_from_json(self):
        """에러 응답 본문에서 detail 추출."""
        assert _error_detail(b'{"detail": "Video not found"}') == "Video not found"
        assert _error_detail(b"plain text") == "plain text"
