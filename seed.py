"""Seed a fresh database with starter portfolio content."""
import asyncio

from portfolio_admin.database import AsyncSessionLocal
from portfolio_admin.models import CodingProfile, Education, PersonalDetails, SkillGroup
from portfolio_admin.services.documents import get_singleton


async def seed() -> None:
    async with AsyncSessionLocal() as db:
        if await get_singleton(db, PersonalDetails) is not None:
            print("Personal details already exist, skipping seed")
            return

        db.add(
            PersonalDetails(
                name="Jane Doe",
                role="Full Stack Developer",
                bio="I build web applications end to end.",
                location="Remote",
                email="jane@example.com",
                github_url="https://github.com/janedoe",
                linkedin_url="https://www.linkedin.com/in/janedoe",
            )
        )
        db.add(
            Education(
                core_objective="Ship reliable software that people enjoy using.",
                academic=[
                    {
                        "institution": "State University",
                        "degree": "B.Tech, Computer Science",
                        "year": "2022",
                    }
                ],
            )
        )
        db.add(SkillGroup(title="Backend", skills=["Python", "FastAPI", "PostgreSQL"]))
        db.add(SkillGroup(title="Frontend", skills=["React", "TypeScript", "CSS"]))
        db.add(
            CodingProfile(
                platform="LeetCode",
                url="https://leetcode.com/janedoe",
                username="janedoe",
                icon="code",
                color="orange",
            )
        )
        await db.commit()
        print("Seeded portfolio content")


if __name__ == "__main__":
    asyncio.run(seed())
