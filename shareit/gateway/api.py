"""File defining all the routes of the gateway"""

from fastapi import APIRouter

from shareit.gateway.module import module_list

api_router = APIRouter()


for module in module_list:
    api_router.include_router(module.router)
