from app.models.user import User
from app.models.friend_request import FriendRequest, FriendRequestStatus
from app.models.friendship import Friendship

__all__ = ["User", "FriendRequest", "FriendRequestStatus", "Friendship"]
