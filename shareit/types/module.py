from fastapi import APIRouter

from shareit.types.module_user_deleter import ModuleUserDeleter


class Module:
    def __init__(
        self,
        root: str,
        tag: str,
        router: APIRouter | None = None,
        user_deleter: ModuleUserDeleter | None = None,
    ):
        """
        Initialize a new Module object.
        :param root: the root of the module, the first segment of its endpoints paths
        :param tag: the tag of the module, used by FastAPI
        :param router: an optional custom APIRouter
        :param user_deleter: an optional object removing the module's data referencing a user, called before a user is deleted
        """
        self.root = root
        self.router = router or APIRouter(tags=[tag])
        self.user_deleter = user_deleter
