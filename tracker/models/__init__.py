from tracker.models.auth_magic_link import AuthMagicLink
from tracker.models.base import Base
from tracker.models.membership import TeamMember
from tracker.models.project import Project
from tracker.models.task import Task
from tracker.models.user import User

__all__ = ["Base", "User", "Project", "TeamMember", "Task", "AuthMagicLink"]
