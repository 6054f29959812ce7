"""
Unit tests for upload_core.models.file
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError
import pytest

from upload_core.models.analysis import ImageAnalysis
from upload_core.models.file import FILE_FIELDS, File, FileStatus, normalize_file_fields


class TestFileConstruction:
    def test_snake_and_camel_inputs_are_equivalent(
        self,
        sample_file_row: dict[str, Any],
        sample_file_payload: dict[str, Any],
    ) -> None:
        from_row = File.from_raw(sample_file_row)
        from_payload = File.from_raw(sample_file_payload)

        assert from_row == from_payload
        for name in FILE_FIELDS:
            assert getattr(from_row, name) == getattr(from_payload, name)

    def test_snake_case_wins_when_both_present(self) -> None:
        file = File.from_raw(
            {
                "file_path": "images/a.png",
                "filePath": "images/b.png",
                "mime_type": "image/png",
                "mimeType": "text/plain",
            }
        )

        assert file.file_path == "images/a.png"
        assert file.mime_type == "image/png"

    def test_camel_case_used_when_snake_is_none(self) -> None:
        file = File.from_raw({"file_size": None, "fileSize": 42})

        assert file.file_size == 42

    def test_empty_input_uses_defaults(self) -> None:
        file = File.from_raw({})

        assert file.status == FileStatus.UPLOADED
        assert file.tags == []
        assert file.id is None
        assert file.public_url is None
        assert file.file_size is None

    def test_explicit_nulls_use_defaults(self) -> None:
        file = File.from_raw({"status": None, "tags": None})

        assert file.status == FileStatus.UPLOADED
        assert file.tags == []

    def test_unknown_keys_are_ignored(self) -> None:
        file = File.from_raw({"filename": "a.png", "bucket": "other"})

        assert file.filename == "a.png"
        assert not hasattr(file, "bucket")

    def test_keyword_construction_matches_from_raw(self) -> None:
        assert File(fileSize=10, filename="x.png") == File.from_raw(
            {"file_size": 10, "filename": "x.png"}
        )

    def test_invalid_status_is_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            File.from_raw({"status": "archived"})

    def test_status_assignment_is_validated(self) -> None:
        file = File.from_raw({"filename": "a.png"})

        file.status = FileStatus.PROCESSING
        assert file.is_processing()

        with pytest.raises(PydanticValidationError):
            file.status = "archived"  # type: ignore[assignment]

    def test_description_and_tags_can_be_assigned(self) -> None:
        file = File.from_raw({"filename": "a.png"})

        file.description = "A dog."
        file.tags = ["dog"]

        assert file.has_ai_analysis()
        assert file.filename == "a.png"


class TestNormalizeFileFields:
    def test_returns_every_field(self) -> None:
        normalized = normalize_file_fields({"userId": "u1"})

        assert set(normalized) == set(FILE_FIELDS)
        assert normalized["user_id"] == "u1"
        assert normalized["status"] is None


class TestFileDerivedQueries:
    @pytest.mark.parametrize(
        ("mime_type", "expected"),
        [
            ("image/png", True),
            ("image/jpeg", True),
            ("application/pdf", False),
            (None, False),
        ],
    )
    def test_is_image(self, mime_type: str | None, expected: bool) -> None:
        assert File.from_raw({"mime_type": mime_type}).is_image() is expected

    def test_has_ai_analysis_false_when_fresh(self) -> None:
        assert File.from_raw({"filename": "a.png"}).has_ai_analysis() is False

    def test_has_ai_analysis_false_for_empty_description(self) -> None:
        assert File.from_raw({"description": ""}).has_ai_analysis() is False

    def test_has_ai_analysis_with_description_only(self) -> None:
        assert File.from_raw({"description": "A cat."}).has_ai_analysis() is True

    def test_has_ai_analysis_with_tags_only(self) -> None:
        assert File.from_raw({"tags": ["cat"]}).has_ai_analysis() is True

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (3_145_728, "3.00"),
            (2_097_152, "2.00"),
            (1_572_864, "1.50"),
            (1_000, "0.00"),
            (0, "0.00"),
            (None, None),
        ],
    )
    def test_get_size_mb(self, size: int | None, expected: str | None) -> None:
        assert File.from_raw({"file_size": size}).get_size_mb() == expected

    def test_status_predicates(self) -> None:
        processing = File.from_raw({"status": "processing"})
        completed = File.from_raw({"status": "completed"})
        failed = File.from_raw({"status": "failed"})
        uploaded = File.from_raw({})

        assert processing.is_processing() and not processing.is_completed()
        assert completed.is_completed() and not completed.is_failed()
        assert failed.is_failed() and not failed.is_processing()
        assert not (uploaded.is_processing() or uploaded.is_completed() or uploaded.is_failed())


class TestFileViews:
    def test_api_view_is_camel_case_with_derived_fields(
        self,
        sample_file_row: dict[str, Any],
    ) -> None:
        view = File.from_raw(sample_file_row).to_api_view()

        assert view["filePath"] == sample_file_row["file_path"]
        assert view["fileSize"] == 3145728
        assert view["mimeType"] == "image/png"
        assert view["publicUrl"] == sample_file_row["public_url"]
        assert view["userId"] == "john"
        assert view["uploadedAt"] == sample_file_row["uploaded_at"]
        assert view["updatedAt"] == sample_file_row["updated_at"]
        assert view["status"] == "completed"
        assert view["isImage"] is True
        assert view["hasAIAnalysis"] is True
        assert view["fileSizeMB"] == "3.00"

    def test_persistence_view_matches_input_row(self, sample_file_row: dict[str, Any]) -> None:
        assert File.from_raw(sample_file_row).to_persistence_view() == sample_file_row

    def test_views_differ_only_by_key_names_and_derived_fields(
        self,
        sample_file_payload: dict[str, Any],
    ) -> None:
        file = File.from_raw(sample_file_payload)
        api_view = file.to_api_view()
        persistence_view = file.to_persistence_view()

        derived = {"isImage", "hasAIAnalysis", "fileSizeMB"}
        assert {k: v for k, v in api_view.items() if k not in derived} == sample_file_payload
        assert len(api_view) == len(persistence_view) + len(derived)

    def test_persistence_view_has_no_derived_fields(self) -> None:
        view = File.from_raw({}).to_persistence_view()

        assert set(view) == set(FILE_FIELDS)
        assert view["status"] == "uploaded"
        assert view["tags"] == []

    def test_views_do_not_share_tag_list(self) -> None:
        file = File.from_raw({"tags": ["a"]})

        file.to_persistence_view()["tags"].append("b")

        assert file.tags == ["a"]


class TestFileWithAnalysis:
    def test_successful_analysis_completes_copy(self) -> None:
        file = File.from_raw({"filename": "a.png", "status": "processing"})
        analysis = ImageAnalysis(
            success=True,
            description="A cat.",
            tags=["a", "b"],
            tag_style="neutral",
        )

        annotated = file.with_analysis(analysis)

        assert annotated.is_completed()
        assert annotated.description == "A cat."
        assert annotated.tags == ["a", "b"]
        assert annotated.updated_at is not None
        assert file.is_processing()
        assert file.tags == []

    def test_failed_analysis_marks_copy_failed(self) -> None:
        file = File.from_raw({"filename": "a.png", "status": "processing"})

        annotated = file.with_analysis(ImageAnalysis.failed("boom"))

        assert annotated.is_failed()
        assert annotated.has_ai_analysis() is False
        assert file.is_processing()

    def test_failed_copy_does_not_share_tags(self) -> None:
        file = File.from_raw({"tags": ["a"], "status": "processing"})

        annotated = file.with_analysis(ImageAnalysis.failed("boom"))
        annotated.tags.append("extra")

        assert file.tags == ["a"]
