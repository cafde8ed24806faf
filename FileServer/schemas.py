from pydantic import BaseModel, Field
from typing import Optional, List

class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""

class LoginResponse(BaseModel):
    success: bool
    token: Optional[str] = None
    message: Optional[str] = None

class SuccessResponse(BaseModel):
    success: bool = True

class FileItem(BaseModel):
    id: str
    name: str
    type: str
    size: Optional[str] = None
    modified: str

class FileListResponse(BaseModel):
    success: bool = True
    items: List[FileItem] = []

class CreateFolderRequest(BaseModel):
    path: str = ""
    folder_name: str = Field("", alias="folderName")

class RenameRequest(BaseModel):
    path: str = ""
    old_name: str = Field("", alias="oldName")
    new_name: str = Field("", alias="newName")

class DeleteRequest(BaseModel):
    path: str = ""
    names: List[str] = []

class UploadResponse(BaseModel):
    success: bool = True
    uploaded: int = 0
