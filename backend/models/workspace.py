from typing import List

from pydantic import BaseModel, Field


class WorkspaceFolderRequest(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)


class WorkspaceFolderResponse(BaseModel):
    path: str
    folder: str


class WorkspaceFilesResponse(BaseModel):
    folder: str
    files: List[str]
