from fastapi import APIRouter
from clinical_backend.api.v1.patients import routes as patients

api_router = APIRouter()
api_router.include_router(patients.router)
