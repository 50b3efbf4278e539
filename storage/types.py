"""Value types shared by every profile backend."""

from typing import NewType

UserID = NewType("UserID", str)
UserProfile = NewType("UserProfile", str)

ProfileMap = dict[UserID, UserProfile]
