"""Tests for submission collection."""

import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.scorecard.services.exceptions import ValidationError
from app.scorecard.services.intake import collect_submission


def upload(name: str, data: bytes, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=name,
        headers=Headers({"content-type": content_type}),
    )


class TestCollectSubmission:
    @pytest.mark.asyncio
    async def test_reads_files_in_order(self):
        submission = await collect_submission(
            " Acme Clinic ",
            "March",
            "2024",
            [
                upload("a.pdf", b"%PDF-a", "application/pdf"),
                upload("b.png", b"png", "image/png"),
            ],
        )

        assert submission.provider_name == "Acme Clinic"
        assert [f.filename for f in submission.files] == ["a.pdf", "b.png"]
        assert submission.files[0].data == b"%PDF-a"
        assert submission.files[1].content_type == "image/png"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "fields",
        [
            ("", "March", "2024"),
            ("Acme", " ", "2024"),
            ("Acme", "March", None),
        ],
    )
    async def test_blank_fields_rejected(self, fields):
        with pytest.raises(ValidationError) as exc_info:
            await collect_submission(*fields, [upload("a.pdf", b"%PDF", "application/pdf")])
        assert exc_info.value.message == "Missing required fields"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("files", [None, []])
    async def test_no_files_rejected(self, files):
        with pytest.raises(ValidationError) as exc_info:
            await collect_submission("Acme", "March", "2024", files)
        assert exc_info.value.message == "No files uploaded"
