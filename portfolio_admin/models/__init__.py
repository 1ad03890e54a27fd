from .personal_details import PersonalDetails
from .education import Education
from .project import Project
from .skill_group import SkillGroup
from .coding_profile import CodingProfile
from .resume import Resume

__all__ = [
    "PersonalDetails",
    "Education",
    "Project",
    "SkillGroup",
    "CodingProfile",
    "Resume",
]
