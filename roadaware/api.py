from contextlib import aclosing
from typing import AsyncIterator, List, Union

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import PlainTextResponse, Response, StreamingResponse
from loguru import logger
from starlette.datastructures import UploadFile as StarletteUploadFile

from roadaware.errors import InvalidInputError, ProviderError
from roadaware.extraction import PriorityRecordStore, get_priority_store
from roadaware.prompts import POTHOLE_ANALYSIS, render_prompt
from roadaware.provider import ProviderClient, get_provider_client
from roadaware.relay import relay_deltas
from roadaware.schemas import ChatCompletionRequest, UploadedImage, build_chat_request

router = APIRouter(prefix="/api/file")

analyze_log = logger.bind(tag="ANALYZE")
stream_log = logger.bind(tag="STREAM")

GENERIC_FAILURE = "Error analyzing pothole images"


def _select_files(*fields: List[Union[UploadFile, str]]) -> List[UploadFile]:
    # Browsers send an empty part, sometimes as a plain string, for an unused
    # file input; those carry no image.
    return [
        part
        for field in fields
        for part in field
        if isinstance(part, StarletteUploadFile) and (part.filename or part.size)
    ]


def _require_input(files: List[UploadFile], user_message: str) -> None:
    if not files and not user_message.strip():
        raise InvalidInputError("No files or message received.")


async def _read_uploads(files: List[UploadFile]) -> List[UploadedImage]:
    uploads = []
    for upload in files:
        uploads.append(
            UploadedImage(
                filename=upload.filename or "",
                content_type=upload.content_type or "application/octet-stream",
                data=await upload.read(),
            )
        )
    return uploads


async def _build_request(
    files: List[UploadFile], user_message: str, *, max_tokens: int, stream: bool = False
) -> ChatCompletionRequest:
    uploads = await _read_uploads(files)
    return build_chat_request(
        render_prompt(POTHOLE_ANALYSIS),
        user_message,
        uploads,
        max_tokens=max_tokens,
        stream=stream,
    )


@router.post("/analyze-potholes")
async def analyze_potholes(
    files: List[Union[UploadFile, str]] = File(default=[]),
    files_array: List[Union[UploadFile, str]] = File(default=[], alias="files[]"),
    userMessage: str = Form(default=""),
    provider: ProviderClient = Depends(get_provider_client),
    store: PriorityRecordStore = Depends(get_priority_store),
):
    files = _select_files(files, files_array)
    _require_input(files, userMessage)
    analyze_log.info(f"Received request: files={len(files)}, text_present={bool(userMessage.strip())}")

    try:
        request = await _build_request(files, userMessage, max_tokens=provider.settings.MAX_TOKENS)
        response = await provider.complete(request)
        media_type = response.headers.get("content-type", "application/json")

        if response.is_error:
            analyze_log.error(f"Provider error: {response.status_code} {response.text}")
            return Response(content=response.content, status_code=response.status_code, media_type=media_type)

        store.update_from_response(response.content)
        return Response(content=response.content, status_code=response.status_code, media_type=media_type)
    except Exception:
        analyze_log.exception("Error analyzing pothole images")
        return PlainTextResponse(GENERIC_FAILURE, status_code=500)


async def _stream_analysis(provider: ProviderClient, request: ChatCompletionRequest) -> AsyncIterator[str]:
    # Once the response has started nothing but model text is written;
    # failures only truncate the stream.
    try:
        async with aclosing(provider.stream_lines(request)) as lines:
            async for delta in relay_deltas(lines):
                yield delta
    except ProviderError as exc:
        stream_log.error(f"Provider error: {exc.status_code} {exc.body}")
    except Exception:
        stream_log.exception("Error streaming provider response")


@router.post("/analyze-potholes/stream")
async def analyze_potholes_stream(
    files: List[Union[UploadFile, str]] = File(default=[]),
    files_array: List[Union[UploadFile, str]] = File(default=[], alias="files[]"),
    userMessage: str = Form(default=""),
    provider: ProviderClient = Depends(get_provider_client),
):
    files = _select_files(files, files_array)
    _require_input(files, userMessage)
    stream_log.info(f"Received request: files={len(files)}, text_present={bool(userMessage.strip())}")

    try:
        request = await _build_request(
            files, userMessage, max_tokens=provider.settings.STREAM_MAX_TOKENS, stream=True
        )
    except Exception:
        stream_log.exception("Error preparing provider request")
        return PlainTextResponse("")

    return StreamingResponse(_stream_analysis(provider, request), media_type="text/plain")
