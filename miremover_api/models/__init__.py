from miremover_api.models.user import User
from miremover_api.models.stat import Stat

__all__ = ["User", "Stat"]
