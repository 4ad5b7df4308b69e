"""Tests for the per-file upload task."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

from ghupload.core.exceptions import ContentStoreError, NetworkError
from ghupload.models.content import RemoteObjectRef, UploadItem, WriteResult
from ghupload.models.progress import FailureStage, TaskState, UploadFailure, UploadSuccess
from ghupload.uploaders.task import LOOKUP_FAILURE_PREFIX, UploadTask


def _item(image_dir: Path, name: str = "a.png") -> UploadItem:
    return UploadItem.from_path(image_dir / name)


class TestUploadTaskWithStore:
    """End-to-end task runs against the fake contents API."""

    def test_new_file_is_created_without_sha(self, image_dir, client, store, settings):
        task = UploadTask(_item(image_dir), client, settings)

        outcome = task.run()

        assert isinstance(outcome, UploadSuccess)
        assert task.state is TaskState.SUCCEEDED
        assert outcome.created is True
        assert "sha" not in json.loads(store.calls("PUT")[0].content)
        assert task.request is not None and not task.request.is_update

    def test_existing_file_is_updated_with_current_sha(self, image_dir, client, store, settings):
        store.add_file("images/a.png", "T")
        task = UploadTask(_item(image_dir), client, settings)

        outcome = task.run()

        assert isinstance(outcome, UploadSuccess)
        assert outcome.created is False
        assert json.loads(store.calls("PUT")[0].content)["sha"] == "T"

    def test_success_carries_both_urls(self, image_dir, client, settings):
        outcome = UploadTask(_item(image_dir), client, settings).run()

        assert outcome.primary_url == (
            "https://raw.githubusercontent.com/octo/assets/main/images/a.png"
        )
        assert outcome.mirror_url == "https://cdn.jsdelivr.net/gh/octo/assets@main/images/a.png"
        assert outcome.target_path == "images/a.png"

    def test_uses_commit_message_template(self, image_dir, client, store, settings):
        UploadTask(_item(image_dir), client, settings).run()

        body = json.loads(store.calls("PUT")[0].content)
        assert body["message"] == "Upload a.png via GitHub API"
        assert body["branch"] == "main"

    def test_lookup_error_skips_write(self, image_dir, client, store, settings):
        store.lookup_status["images/a.png"] = 500
        task = UploadTask(_item(image_dir), client, settings)

        outcome = task.run()

        assert isinstance(outcome, UploadFailure)
        assert outcome.stage is FailureStage.LOOKUP
        assert outcome.status_code == 500
        assert outcome.reason.startswith(LOOKUP_FAILURE_PREFIX)
        assert task.state is TaskState.FAILED
        assert store.calls("PUT") == []

    def test_stale_sha_is_reported_not_retried(self, image_dir, client, store, settings):
        store.add_file("images/a.png", "T")
        task = UploadTask(_item(image_dir), client, settings)

        # Another writer lands between our lookup and our write
        original_lookup = client.lookup

        def lookup_then_race(path, branch):
            ref = original_lookup(path, branch)
            store.files[path] = "T2"
            return ref

        client.lookup = lookup_then_race
        outcome = task.run()

        assert isinstance(outcome, UploadFailure)
        assert outcome.stage is FailureStage.WRITE
        assert outcome.status_code == 409
        assert len(store.calls("PUT")) == 1

    def test_write_error_is_captured(self, image_dir, client, store, settings):
        store.write_status["images/a.png"] = 502

        outcome = UploadTask(_item(image_dir), client, settings).run()

        assert isinstance(outcome, UploadFailure)
        assert outcome.stage is FailureStage.WRITE
        assert outcome.status_code == 502
        assert "write failed with 502" in outcome.reason

    def test_unreadable_file_fails_at_read(self, temp_dir, client, store, settings):
        item = UploadItem(name="gone.png", path=temp_dir / "gone.png")

        outcome = UploadTask(item, client, settings).run()

        assert isinstance(outcome, UploadFailure)
        assert outcome.stage is FailureStage.READ
        assert store.calls("PUT") == []


class TestUploadTaskBoundary:
    """The task never raises, whatever the client does."""

    def test_transport_error_during_lookup(self, image_dir, settings):
        client = MagicMock()
        client.lookup.side_effect = NetworkError("https://api.github.com", "reset")

        outcome = UploadTask(_item(image_dir), client, settings).run()

        assert isinstance(outcome, UploadFailure)
        assert outcome.stage is FailureStage.LOOKUP
        client.write.assert_not_called()

    def test_unexpected_exception_during_write(self, image_dir, settings):
        client = MagicMock()
        client.lookup.return_value = RemoteObjectRef(path="images/a.png")
        client.write.side_effect = KeyError("content")

        task = UploadTask(_item(image_dir), client, settings)
        outcome = task.run()

        assert isinstance(outcome, UploadFailure)
        assert "unexpected error" in outcome.reason
        assert task.state is TaskState.FAILED

    def test_state_walks_through_submitted(self, image_dir, settings):
        client = MagicMock()
        client.lookup.return_value = RemoteObjectRef(path="images/a.png", sha="T")
        states = []

        task = UploadTask(_item(image_dir), client, settings)

        def write(request):
            states.append(task.state)
            assert request.sha == "T"
            return WriteResult(path=request.path, primary_url="https://x/a.png", created=False)

        client.write.side_effect = write
        outcome = task.run()

        assert states == [TaskState.SUBMITTED]
        assert outcome.success is True

    def test_content_store_error_keeps_status(self, image_dir, settings):
        client = MagicMock()
        client.lookup.side_effect = ContentStoreError("boom", status_code=418, path="images/a.png")

        outcome = UploadTask(_item(image_dir), client, settings).run()

        assert outcome.status_code == 418
