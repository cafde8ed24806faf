# FileServer/files.py
from typing import List

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import FileResponse, JSONResponse

from .dependencies import get_current_user, get_files
from .logutil import bind, get_logger, span
from .schemas import (
    CreateFolderRequest, DeleteRequest, FileListResponse, RenameRequest,
    SuccessResponse, UploadResponse,
)

logger = get_logger("fileserver.files", file_basename="files")

router = APIRouter()

def _log(user: dict, path: str):
    return bind(logger, user=user["username"], path=path or "root")

@router.get("", response_model=FileListResponse, response_model_exclude_none=True)
def list_files(path: str = Query(default=""), user=Depends(get_current_user), files=Depends(get_files)):
    with span(_log(user, path), "files.list"):
        items = files.list_files(user["username"], path)
    return {"success": True, "items": items}

@router.delete("", response_model=SuccessResponse)
def delete_files(body: DeleteRequest, user=Depends(get_current_user), files=Depends(get_files)):
    if not body.names:
        return JSONResponse(status_code=400, content={"error": "No files specified"})
    with span(_log(user, body.path), "files.delete", count=len(body.names)):
        files.delete_items(user["username"], body.path, body.names)
    return {"success": True}

@router.post("/folder", response_model=SuccessResponse)
def create_folder(body: CreateFolderRequest, user=Depends(get_current_user), files=Depends(get_files)):
    if not body.folder_name:
        return JSONResponse(status_code=400, content={"error": "Folder name not specified"})
    with span(_log(user, body.path), "files.mkdir", folder=body.folder_name):
        files.create_folder(user["username"], body.path, body.folder_name)
    return {"success": True}

@router.post("/rename", response_model=SuccessResponse)
def rename_item(body: RenameRequest, user=Depends(get_current_user), files=Depends(get_files)):
    if not body.old_name or not body.new_name:
        return JSONResponse(status_code=400, content={"error": "Names not specified"})
    with span(_log(user, body.path), "files.rename", old=body.old_name, new=body.new_name):
        files.rename_item(user["username"], body.path, body.old_name, body.new_name)
    return {"success": True}

@router.post("/upload", response_model=UploadResponse)
def upload_files(path: str = Query(default=""),
                 uploads: List[UploadFile] = File(default=[], alias="files"),
                 user=Depends(get_current_user), files=Depends(get_files)):
    if not uploads:
        return JSONResponse(status_code=400, content={"error": "No files uploaded"})
    log = _log(user, path)
    uploaded = 0
    for up in uploads:
        if files.save_upload(user["username"], path, up.filename, up.file):
            uploaded += 1
    log.info("files.upload.ok", extra={"uploaded": uploaded, "sent": len(uploads)})
    return {"success": True, "uploaded": uploaded}

@router.get("/download")
def download_file(path: str = Query(default=""), name: str = Query(default=""),
                  user=Depends(get_current_user), files=Depends(get_files)):
    target = files.download_path(user["username"], path, name)
    _log(user, path).info("files.download.ok", extra={"item": name})
    return FileResponse(target, media_type="application/octet-stream", filename=target.name)
