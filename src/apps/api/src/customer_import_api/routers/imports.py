"""Customer CSV import endpoints."""
import asyncio
import os
from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, Response, UploadFile

from customer_import_api.services import get_coordinator
from customer_import_api.settings import get_settings
from customer_import_core.jobs import ImportOptions
from customer_import_core.pipeline import ImportCoordinator
from customer_import_core.util import generate_import_id

router = APIRouter(prefix="/customers/import", tags=["imports"])
logger = structlog.get_logger()

UPLOAD_CHUNK_BYTES = 1024 * 1024


def _is_csv(file: UploadFile) -> bool:
    suffix = Path(file.filename or "").suffix.lower()
    return file.content_type == "text/csv" or suffix == ".csv"


async def _save_upload(file: UploadFile, max_bytes: int) -> str:
    """Stream an upload to disk, enforcing the size limit."""
    settings = get_settings()
    os.makedirs(settings.upload_dir, exist_ok=True)
    save_path = os.path.join(settings.upload_dir, f"customers-{generate_import_id()}.csv")
    written = 0
    with open(save_path, "wb") as f:
        while True:
            chunk = await file.read(UPLOAD_CHUNK_BYTES)
            if not chunk:
                break
            written += len(chunk)
            if written > max_bytes:
                break
            f.write(chunk)
    if written > max_bytes:
        os.remove(save_path)
        raise HTTPException(
            status_code=413, detail=f"File too large (max {settings.max_upload_mb} MB)"
        )
    return save_path


async def _remove_when_finished(coordinator: ImportCoordinator, import_id: str, path: str):
    await coordinator.wait(import_id)
    try:
        os.remove(path)
        logger.info("upload_removed", import_id=import_id, path=path)
    except FileNotFoundError:
        pass


def _get_job_or_404(coordinator: ImportCoordinator, import_id: str):
    job = coordinator.get_progress(import_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Import not found")
    return job


@router.post("/csv", status_code=202)
async def import_csv(
    request: Request,
    csv_file: UploadFile = File(...),
    batch_size: int | None = Form(None),
    continue_on_error: bool = Form(True),
    coordinator: ImportCoordinator = Depends(get_coordinator),
):
    """Upload a CSV file and start importing it in the background."""
    settings = get_settings()
    if not _is_csv(csv_file):
        raise HTTPException(status_code=400, detail="Only CSV files are allowed")
    if batch_size is not None and batch_size < 1:
        raise HTTPException(status_code=400, detail="batch_size must be at least 1")

    path = await _save_upload(csv_file, settings.max_upload_mb * 1024 * 1024)
    options = ImportOptions(
        batch_size=batch_size or settings.import_batch_size,
        continue_on_error=continue_on_error,
        max_errors=settings.import_max_errors,
        read_chunk_size=settings.import_read_chunk_size,
    )
    import_id, progress = coordinator.start_import(path, options)

    cleanup = asyncio.create_task(_remove_when_finished(coordinator, import_id, path))
    request.app.state.background_tasks.add(cleanup)
    cleanup.add_done_callback(request.app.state.background_tasks.discard)

    return {
        "import_id": import_id,
        "progress": progress.model_dump(mode="json"),
        "status_url": f"/api/customers/import/status/{import_id}",
    }


@router.get("/active")
async def list_active_imports(coordinator: ImportCoordinator = Depends(get_coordinator)):
    """List every import still held in the registry."""
    return {
        "imports": {
            import_id: job.model_dump(mode="json")
            for import_id, job in coordinator.list_active().items()
        }
    }


@router.get("/status/{import_id}")
async def get_import_status(
    import_id: str, coordinator: ImportCoordinator = Depends(get_coordinator)
):
    """Get import progress, including the error list."""
    return _get_job_or_404(coordinator, import_id).model_dump(mode="json")


@router.get("/stats/{import_id}")
async def get_import_stats(
    import_id: str, coordinator: ImportCoordinator = Depends(get_coordinator)
):
    """Get import counters without the error list."""
    stats = coordinator.get_stats(import_id)
    if stats is None:
        raise HTTPException(status_code=404, detail="Import not found")
    return stats


@router.post("/cancel/{import_id}")
async def cancel_import(import_id: str, coordinator: ImportCoordinator = Depends(get_coordinator)):
    """Cancel a processing import."""
    if not coordinator.cancel(import_id):
        job = _get_job_or_404(coordinator, import_id)
        raise HTTPException(
            status_code=409,
            detail=f"Import cannot be cancelled (status: {job.status.value})",
        )
    return {"import_id": import_id, "cancelled": True}


@router.delete("/{import_id}", status_code=204)
async def cleanup_import(import_id: str, coordinator: ImportCoordinator = Depends(get_coordinator)):
    """Forget an import and its progress record."""
    _get_job_or_404(coordinator, import_id)
    coordinator.cleanup(import_id)
    return Response(status_code=204)
