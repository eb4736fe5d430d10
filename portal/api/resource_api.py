from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from portal.api.deps import get_settings, get_storage
from portal.auth.gate import GatedRoute, Operation, require
from portal.configs.settings import Settings
from portal.configs.storage import make_upload_url
from portal.models import EntityKind, Resource
from portal.models.resource import ResourceCreate
from portal.schemas.support_schema import UploadLinkResponse
from portal.services.entity_service import delete_or_404, get_or_404
from portal.services.storage import Storage
from portal.utils.utils import make_resource_file_path

router = APIRouter(prefix="/api/resources", tags=["resources"], route_class=GatedRoute)


@router.get("", response_model=List[Resource])
def list_resources(
    category: Optional[str] = Query(None),
    course_code: Optional[str] = Query(None),
    current_user=Depends(require(EntityKind.resources, Operation.list)),
    storage: Storage = Depends(get_storage),
):
    return storage.list(EntityKind.resources, category=category, course_code=course_code)


@router.post("/upload-link", response_model=UploadLinkResponse)
def create_upload_link(
    file_name: str = Query(..., min_length=1),
    course_code: Optional[str] = Query(None),
    current_user=Depends(require(EntityKind.resources, Operation.create)),
    settings: Settings = Depends(get_settings),
):
    path = make_resource_file_path(course_code, file_name)
    return UploadLinkResponse(upload_url=make_upload_url(settings, path), file_url=path)


@router.get("/{resource_id}", response_model=Resource)
def get_resource(
    resource_id: int,
    current_user=Depends(require(EntityKind.resources, Operation.read)),
    storage: Storage = Depends(get_storage),
):
    return get_or_404(storage, EntityKind.resources, resource_id, "Resource")


@router.post("", response_model=Resource, status_code=201)
def create_resource(
    resource: ResourceCreate,
    current_user=Depends(require(EntityKind.resources, Operation.create)),
    storage: Storage = Depends(get_storage),
):
    return storage.create(EntityKind.resources, resource)


@router.delete("/{resource_id}", status_code=204)
def delete_resource(
    resource_id: int,
    current_user=Depends(require(EntityKind.resources, Operation.delete)),
    storage: Storage = Depends(get_storage),
):
    delete_or_404(storage, EntityKind.resources, resource_id, "Resource")
    return Response(status_code=204)
