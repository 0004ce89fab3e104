"""
tests.test_logging
~~~~~~~~~~~~~~~~~~

日志脱敏测试 —— 访问日志中不得出现 host ID。
"""
from __future__ import annotations

import logging

import pytest

from chewcrew.core.logging import HostIdRedactingFilter, install_log_redaction, mask_host_id


class TestMaskHostId:
    """测试 query string 脱敏。"""

    def test_masks_host_id_value(self) -> None:
        assert mask_host_id("/room/end?id=abc&hostid=s3cret") == "/room/end?id=abc&hostid=***"

    def test_host_id_first_parameter(self) -> None:
        assert mask_host_id("/room/end?hostid=s3cret&id=abc") == "/room/end?hostid=***&id=abc"

    def test_other_parameters_untouched(self) -> None:
        assert mask_host_id("/room/vote?id=abc&name=hostid") == "/room/vote?id=abc&name=hostid"


class TestAccessLogRedaction:
    """测试挂在 uvicorn 访问日志上的过滤器。"""

    def test_access_log_hides_host_id(self, caplog: pytest.LogCaptureFixture) -> None:
        install_log_redaction()
        access = logging.getLogger("uvicorn.access")

        with caplog.at_level(logging.INFO, logger="uvicorn.access"):
            access.info(
                '%s - "%s %s HTTP/%s" %d',
                "127.0.0.1:5000", "GET", "/room/end?id=abc&hostid=s3cret", "1.1", 200,
            )

        assert "s3cret" not in caplog.text
        assert "hostid=***" in caplog.text
        assert "id=abc" in caplog.text

    def test_install_is_idempotent(self) -> None:
        install_log_redaction()
        install_log_redaction()

        filters = logging.getLogger("uvicorn.access").filters
        assert sum(isinstance(f, HostIdRedactingFilter) for f in filters) == 1
