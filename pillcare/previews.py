"""Previews for uploaded files.

Images are read fully and turned into ``data:`` URLs, everything else gets
no preview. Works with anything exposing ``content_type`` and an async
``read()``, e.g. FastAPI's ``UploadFile``.
"""
import base64
from dataclasses import dataclass
from typing import Any, List, Optional

IMAGE_PREFIX = "image/"


@dataclass
class FileWithPreview:
    file: Any
    preview: Optional[str] = None


async def read_file_as_data_url(file) -> str:
    data = await file.read()
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{file.content_type};base64,{payload}"


async def create_file_previews(files) -> List[FileWithPreview]:
    previews = []
    # one read at a time, a failed read aborts the whole batch
    for f in files:
        if (f.content_type or "").startswith(IMAGE_PREFIX):
            previews.append(FileWithPreview(f, await read_file_as_data_url(f)))
        else:
            previews.append(FileWithPreview(f, None))
    return previews
