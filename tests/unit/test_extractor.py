"""Unit tests for commit normalisation and metadata block parsing."""
# ruff: noqa: D103

from __future__ import annotations

import copy
import datetime as dt
import typing as typ

import pytest

from commit_metadata import (
    EventPayloadError,
    MetadataParseError,
    UnsupportedEventError,
    extract_commit_messages,
    extract_metadata,
    parse_metadata_block,
)
from tests.helpers.github_events import commit, pull_request_payload, push_payload

if typ.TYPE_CHECKING:
    from tests.helpers.fake_logger import FakeLogger


class TestExtractCommitMessages:
    """Tests for extract_commit_messages."""

    @pytest.mark.parametrize("event_name", ["push", "pull_request", "release"])
    def test_missing_payload_yields_no_records(self, event_name: str) -> None:
        assert extract_commit_messages(event_name, None) == []

    def test_pull_request_joins_title_and_body(self) -> None:
        payload = pull_request_payload("T", "B")

        (record,) = extract_commit_messages("pull_request", payload)

        assert record.message == "T\n\nB"

    @pytest.mark.parametrize("body", [None, ""])
    def test_pull_request_without_body_uses_title(self, body: str | None) -> None:
        payload = pull_request_payload("Only a title", body)

        (record,) = extract_commit_messages("pull_request", payload)

        assert record.message == "Only a title"

    def test_pull_request_record_carries_pull_request_fields(self) -> None:
        payload = pull_request_payload("T", "B", author="octocat")

        (record,) = extract_commit_messages("pull_request", payload)

        assert record.id == 17
        assert record.url == "https://api.github.com/repos/org/repo/pulls/5"
        assert record.author == "octocat"
        assert record.fields["number"] == 5
        assert record.as_dict()["user"] == {"login": "ada"}
        assert record.as_dict()["message"] == "T\n\nB"

    def test_pull_request_without_author_field_has_no_author(self) -> None:
        (record,) = extract_commit_messages(
            "pull_request", pull_request_payload("T")
        )

        assert record.author is None

    def test_pull_request_message_field_replaces_composed_message(self) -> None:
        payload = pull_request_payload("T", "B", message="from the payload")

        (record,) = extract_commit_messages("pull_request", payload)

        assert record.message == "from the payload"
        assert record.as_dict()["message"] == "from the payload"

    def test_pull_request_event_without_pull_request_yields_nothing(self) -> None:
        assert extract_commit_messages("pull_request", {"action": "opened"}) == []

    def test_push_keeps_commits_with_messages_in_order(self) -> None:
        payload = push_payload(
            commit("first", commit_id="a1"),
            commit("", commit_id="a2"),
            commit(None, commit_id="a3"),
            commit("fourth", commit_id="a4"),
        )

        records = extract_commit_messages("push", payload)

        assert [record.id for record in records] == ["a1", "a4"]
        assert [record.message for record in records] == ["first", "fourth"]

    def test_push_record_drops_other_commit_fields(self) -> None:
        payload = push_payload(
            commit("msg", commit_id="a1", url="u1", author="al", tree_id="t1")
        )

        (record,) = extract_commit_messages("push", payload)

        assert record.as_dict() == {
            "message": "msg",
            "url": "u1",
            "id": "a1",
            "author": "al",
        }

    def test_push_without_commits_yields_nothing(self) -> None:
        assert extract_commit_messages("push", {"ref": "refs/heads/main"}) == []

    def test_unsupported_event_raises(self) -> None:
        with pytest.raises(UnsupportedEventError) as excinfo:
            extract_commit_messages("release", {"action": "published"})

        assert "Unsupported event type: release" in str(excinfo.value)
        assert excinfo.value.event_name == "release"

    @pytest.mark.parametrize(
        ("event_name", "payload"),
        [
            ("push", {"commits": "not a list"}),
            ("push", {"commits": [{"message": 42}]}),
            ("pull_request", {"pull_request": {"body": "no title"}}),
            ("pull_request", ["not", "an", "object"]),
        ],
    )
    def test_malformed_payload_raises(self, event_name: str, payload: object) -> None:
        with pytest.raises(EventPayloadError) as excinfo:
            extract_commit_messages(event_name, payload)

        assert excinfo.value.event_name == event_name


class TestParseMetadataBlock:
    """Tests for parse_metadata_block."""

    def test_message_without_block_returns_none(self) -> None:
        assert parse_metadata_block("no block here") is None

    def test_single_marker_is_not_a_block(self) -> None:
        assert parse_metadata_block("Title\n\n---\ntype: fix\n") is None

    def test_parses_block_between_markers(self) -> None:
        message = "Fix bug in parser\n\n---\ntype: fix\nbreaking: false\n---\n"

        assert parse_metadata_block(message) == {"type": "fix", "breaking": False}

    def test_only_first_block_is_read(self) -> None:
        message = "---\nfirst: 1\n---\ntext\n---\nsecond: 2\n---"

        assert parse_metadata_block(message) == {"first": 1}

    def test_block_supports_sequences_and_comments(self) -> None:
        message = "---\n# release notes\nlabels: [docs, chore]\nissues:\n  - 12\n---"

        assert parse_metadata_block(message) == {
            "labels": ["docs", "chore"],
            "issues": [12],
        }

    def test_block_parses_dates(self) -> None:
        assert parse_metadata_block("---\ndue: 2024-03-01\n---") == {
            "due": dt.date(2024, 3, 1)
        }

    def test_invalid_yaml_raises(self) -> None:
        message = "---\nfoo: [unclosed\n---"

        with pytest.raises(MetadataParseError) as excinfo:
            parse_metadata_block(message)

        assert excinfo.value.block == "\nfoo: [unclosed\n"

    def test_duplicate_keys_raise(self) -> None:
        with pytest.raises(MetadataParseError):
            parse_metadata_block("---\nkey: 1\nkey: 2\n---")

    @pytest.mark.parametrize("message", ["------", "---\n---", "---\n~\n---"])
    def test_empty_block_raises(self, message: str) -> None:
        with pytest.raises(MetadataParseError, match="is empty"):
            parse_metadata_block(message)

    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ("---\njust a scalar\n---", "just a scalar"),
            ("---\n- a\n- b\n---", ["a", "b"]),
        ],
    )
    def test_non_mapping_block_is_returned_as_loaded(
        self, message: str, expected: object
    ) -> None:
        assert parse_metadata_block(message) == expected

    def test_non_string_keys_become_json_keys(self) -> None:
        message = (
            "---\ntrue: 1\n~: 2\n3: x\n2.5: y\n.inf: z\nnested:\n  - false: n\n---"
        )

        assert parse_metadata_block(message) == {
            "true": 1,
            "null": 2,
            "3": "x",
            "2.5": "y",
            "Infinity": "z",
            "nested": [{"false": "n"}],
        }


class TestExtractMetadata:
    """Tests for extract_metadata."""

    @pytest.mark.usefixtures("extractor_logger")
    def test_push_example_end_to_end(self) -> None:
        payload = {
            "commits": [
                {
                    "message": "chore\n\n---\nlabel: chore\n---",
                    "id": "a1",
                    "url": "u1",
                    "author": "al",
                },
                {"message": "no block here", "id": "a2", "url": "u2", "author": "bo"},
            ]
        }

        metadata = extract_metadata("push", payload)

        assert metadata == [{"label": "chore", "author": "al", "id": "a1", "url": "u1"}]
        assert list(metadata[0]) == ["label", "author", "id", "url"]

    @pytest.mark.usefixtures("extractor_logger")
    def test_push_preserves_order_and_provenance(self) -> None:
        payload = push_payload(
            commit("one\n---\nn: 1\n---", commit_id="a1", url="u1", author="al"),
            commit("", commit_id="a2"),
            commit("two", commit_id="a3"),
            commit("three\n---\nn: 3\n---", commit_id="a4", url="u4", author="cy"),
        )

        metadata = extract_metadata("push", payload)

        assert metadata == [
            {"n": 1, "author": "al", "id": "a1", "url": "u1"},
            {"n": 3, "author": "cy", "id": "a4", "url": "u4"},
        ]

    @pytest.mark.usefixtures("extractor_logger")
    def test_provenance_overwrites_block_fields(self) -> None:
        payload = push_payload(
            commit("---\nid: mine\nauthor: me\n---", commit_id="a1", author="al")
        )

        (record,) = extract_metadata("push", payload)

        assert record["id"] == "a1"
        assert record["author"] == "al"

    @pytest.mark.usefixtures("extractor_logger")
    def test_pull_request_metadata_uses_pull_request_provenance(self) -> None:
        payload = pull_request_payload("Add docs", "---\ntype: docs\n---")

        metadata = extract_metadata("pull_request", payload)

        assert metadata == [
            {
                "type": "docs",
                "author": None,
                "id": 17,
                "url": "https://api.github.com/repos/org/repo/pulls/5",
            }
        ]

    @pytest.mark.usefixtures("extractor_logger")
    def test_markdown_table_in_pull_request_body_is_published(self) -> None:
        payload = pull_request_payload(
            "T", "Summary\n\n| a | b |\n|---|---|\n| 1 | 2 |"
        )

        metadata = extract_metadata("pull_request", payload)

        assert len(metadata) == 1
        assert isinstance(metadata[0], str)

    @pytest.mark.usefixtures("extractor_logger")
    def test_horizontal_rules_in_prose_publish_the_enclosed_text(self) -> None:
        payload = pull_request_payload(
            "T", "Intro\n\n---\nSome notes here\n---\nFooter"
        )

        assert extract_metadata("pull_request", payload) == ["Some notes here"]

    @pytest.mark.usefixtures("extractor_logger")
    def test_only_mapping_blocks_receive_provenance(self) -> None:
        payload = push_payload(
            commit("---\n- a\n- b\n---", commit_id="a1", author="al"),
            commit("---\nlabel: x\n---", commit_id="a2", url="u2", author="bo"),
        )

        assert extract_metadata("push", payload) == [
            ["a", "b"],
            {"label": "x", "author": "bo", "id": "a2", "url": "u2"},
        ]

    @pytest.mark.usefixtures("extractor_logger")
    def test_malformed_block_fails_the_whole_batch(self) -> None:
        payload = push_payload(
            commit("ok\n---\nlabel: fine\n---", commit_id="a1"),
            commit("bad\n---\nfoo: [unclosed\n---", commit_id="a2"),
        )

        with pytest.raises(MetadataParseError):
            extract_metadata("push", payload)

    @pytest.mark.usefixtures("extractor_logger")
    def test_extraction_is_repeatable_and_leaves_payload_untouched(self) -> None:
        payload = pull_request_payload("T", "---\nlabel: x\n---")
        snapshot = copy.deepcopy(payload)

        first = extract_metadata("pull_request", payload)
        second = extract_metadata("pull_request", payload)

        assert first == second
        assert payload == snapshot

    def test_logs_messages_and_each_processed_record(
        self, extractor_logger: FakeLogger
    ) -> None:
        payload = push_payload(
            commit("first", commit_id="a1", url="u1", author="al"),
            commit("second", commit_id="a2", url="u2", author="bo"),
        )

        extract_metadata("push", payload)

        assert extractor_logger.messages("DEBUG") == ["Commit messages: first\nsecond"]
        assert extractor_logger.messages("INFO") == [
            'Processing commit: {"message":"first","url":"u1","id":"a1","author":"al"}',
            'Processing commit: {"message":"second","url":"u2","id":"a2","author":"bo"}',
        ]
