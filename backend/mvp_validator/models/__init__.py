from .analytics import Analytics
from .campaign import Campaign
from .landing_page import LandingPage
from .project import Project
from .prototype import Prototype
from .user import User

__all__ = ["Analytics", "Campaign", "LandingPage", "Project", "Prototype", "User"]
