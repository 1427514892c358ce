"""
Seed the projects collection with sample portfolio projects.

Run with:  python seed_sample_data.py
Uses DATABASE_URL from the environment / .env like the API itself.
"""
import asyncio
import sys
from typing import Dict, List

from sqlalchemy.ext.asyncio import async_sessionmaker

# Color codes for terminal output
GREEN = "\033[92m"
RED = "\033[91m"
BLUE = "\033[94m"
RESET = "\033[0m"


SAMPLE_PROJECTS: List[Dict] = [
    {
        "title": "E-Commerce Platform",
        "description": "A full-featured e-commerce platform built with Angular, featuring user authentication, product catalog, shopping cart, and payment integration.",
        "technologies": ["Angular", "TypeScript", "Firebase", "Stripe"],
        "github_url": "https://github.com/username/ecommerce-platform",
        "live_url": "https://ecommerce-demo.com",
    },
    {
        "title": "Task Management App",
        "description": "A collaborative task management application with real-time updates, drag-and-drop functionality, and team collaboration features.",
        "technologies": ["React", "Redux", "Socket.io", "MongoDB"],
        "github_url": "https://github.com/username/task-manager",
        "live_url": "https://taskmanager-demo.com",
    },
    {
        "title": "Weather Dashboard",
        "description": "A responsive weather dashboard with location-based forecasts, interactive maps, and detailed weather analytics using multiple APIs.",
        "technologies": ["JavaScript", "API", "Chart.js", "CSS3"],
        "github_url": "https://github.com/username/weather-dashboard",
        "live_url": "https://weather-demo.com",
    },
    {
        "title": "Personal Blog",
        "description": "A modern blog platform with CMS functionality, markdown support, and SEO optimization built with Angular and Node.js.",
        "technologies": ["Angular", "Node.js", "MongoDB", "Markdown"],
        "github_url": "https://github.com/username/personal-blog",
        "live_url": "https://blog-demo.com",
    },
    {
        "title": "Real-time Chat App",
        "description": "A real-time messaging application with group chat, file sharing, and emoji reactions using WebSocket technology.",
        "technologies": ["React", "Socket.io", "Express", "JWT"],
        "github_url": "https://github.com/username/chat-app",
        "live_url": "https://chat-demo.com",
    },
    {
        "title": "Memory Game",
        "description": "An interactive memory card game with multiple difficulty levels, score tracking, and smooth animations using vanilla JavaScript.",
        "technologies": ["JavaScript", "CSS3", "HTML5", "Canvas"],
        "github_url": "https://github.com/username/memory-game",
        "live_url": "https://memory-demo.com",
    },
]


def print_status(message: str, status: bool):
    """Print colored status message."""
    symbol = f"{GREEN}✓{RESET}" if status else f"{RED}✗{RESET}"
    print(f"{symbol} {message}")


async def seed(store, session_factory: async_sessionmaker) -> List[str]:
    """Insert every sample project.  Returns the new document ids."""
    ids: List[str] = []
    async with session_factory() as session:
        for data in SAMPLE_PROJECTS:
            project = await store.add_project(session, dict(data))
            print_status(f"Added project: {project.title} with ID: {project.id}", True)
            ids.append(project.id)
    return ids


async def main():
    from portfolio_api.database import AsyncSessionLocal, close_db, init_db
    from portfolio_api.services.document_store import document_store

    print(f"\n{BLUE}{'='*60}{RESET}")
    print(f"{BLUE}Portfolio Backend - Sample Data{RESET}")
    print(f"{BLUE}{'='*60}{RESET}\n")

    try:
        await init_db()
        ids = await seed(document_store, AsyncSessionLocal)
    except Exception as e:
        print_status(f"Error adding sample data: {str(e)}", False)
        sys.exit(1)
    finally:
        await close_db()

    print(f"\n{GREEN}✓ All sample data added successfully! ({len(ids)} projects){RESET}")
    print(f"{BLUE}{'='*60}{RESET}\n")


if __name__ == "__main__":
    asyncio.run(main())
