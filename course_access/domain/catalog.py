"""
Course Catalog

Read-only catalog of courses, blocks and lessons. Loaded once at process
start from a YAML file (CATALOG_FILE) or the built-in default, never
mutated afterwards.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional, Tuple

import yaml

from .entitlements import BLOCK_ID_PATTERN, FULL_ID_PATTERN, make_block_id, make_full_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Lesson:
    position: int
    title: str
    video_url: str = ""


@dataclass(frozen=True)
class Block:
    number: int
    title: str
    price: int
    lessons: Tuple[Lesson, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Course:
    id: str
    title: str
    full_price: int
    blocks: Tuple[Block, ...] = field(default_factory=tuple)

    def block(self, number: int) -> Optional[Block]:
        for block in self.blocks:
            if block.number == number:
                return block
        return None


@dataclass(frozen=True)
class PricedItem:
    """A purchasable entitlement with its catalog price"""

    entitlement_id: str
    title: str
    price: int


class Catalog:
    def __init__(self, courses: Tuple[Course, ...]):
        self._courses: Dict[str, Course] = {course.id: course for course in courses}

    @property
    def courses(self) -> Tuple[Course, ...]:
        return tuple(self._courses.values())

    def get_course(self, course_id: str) -> Optional[Course]:
        return self._courses.get(course_id)

    def find_block(self, entitlement_id: str) -> Optional[Block]:
        match = BLOCK_ID_PATTERN.match(entitlement_id)
        if match is None:
            return None
        course = self._courses.get(match.group("course"))
        if course is None:
            return None
        return course.block(int(match.group("number")))

    def find_item(self, entitlement_id: str) -> Optional[PricedItem]:
        """Resolve a block or full-course id to its title and price."""
        block = self.find_block(entitlement_id)
        if block is not None:
            return PricedItem(entitlement_id, block.title, block.price)

        match = FULL_ID_PATTERN.match(entitlement_id)
        if match is not None:
            course = self._courses.get(match.group("course"))
            if course is not None:
                return PricedItem(entitlement_id, course.title, course.full_price)
        return None

    def is_valid_entitlement(self, entitlement_id: str) -> bool:
        return self.find_item(entitlement_id) is not None

    def to_dict(self) -> dict:
        return {
            course.id: {
                "title": course.title,
                "full_id": make_full_id(course.id),
                "full_price": course.full_price,
                "blocks": [
                    {
                        "id": make_block_id(course.id, block.number),
                        "number": block.number,
                        "title": block.title,
                        "price": block.price,
                        "lessons_count": len(block.lessons),
                    }
                    for block in course.blocks
                ],
            }
            for course in self.courses
        }


def _default_lessons() -> Tuple[Lesson, ...]:
    return tuple(Lesson(position=n, title=f"Lesson {n}") for n in range(1, 6))


DEFAULT_CATALOG_DATA = {
    "course-1": {
        "title": "Course 1: Skin care basics",
        "full_price": 1499,
        "blocks": [
            {"number": 1, "title": "Basic care", "price": 499},
            {"number": 2, "title": "Serums and actives", "price": 499},
            {"number": 3, "title": "Problem skin", "price": 499},
            {"number": 4, "title": "Anti-age and recovery", "price": 499},
        ],
    },
    "course-2": {
        "title": "Course 2",
        "full_price": 1499,
        "blocks": [{"number": n, "title": f"Block {n}", "price": 499} for n in range(1, 5)],
    },
    "course-3": {
        "title": "Course 3",
        "full_price": 1499,
        "blocks": [{"number": n, "title": f"Block {n}", "price": 499} for n in range(1, 5)],
    },
    "course-4": {
        "title": "Course 4",
        "full_price": 1499,
        "blocks": [{"number": n, "title": f"Block {n}", "price": 499} for n in range(1, 5)],
    },
}


def build_catalog(data: dict) -> Catalog:
    """Build a Catalog from its mapping form; raises ValueError on bad shape."""
    courses = []
    for course_id, course_data in data.items():
        if FULL_ID_PATTERN.match(make_full_id(course_id)) is None:
            raise ValueError(f"Invalid course id: {course_id!r}")

        blocks = []
        for block_data in course_data.get("blocks", []):
            lessons_data = block_data.get("lessons")
            if lessons_data is None:
                lessons = _default_lessons()
            else:
                lessons = tuple(
                    Lesson(
                        position=int(lesson.get("position", index)),
                        title=lesson["title"],
                        video_url=lesson.get("video_url", ""),
                    )
                    for index, lesson in enumerate(lessons_data, start=1)
                )
            blocks.append(
                Block(
                    number=int(block_data["number"]),
                    title=block_data["title"],
                    price=int(block_data["price"]),
                    lessons=tuple(sorted(lessons, key=lambda lesson: lesson.position)),
                )
            )

        courses.append(
            Course(
                id=course_id,
                title=course_data.get("title", course_id),
                full_price=int(course_data["full_price"]),
                blocks=tuple(sorted(blocks, key=lambda block: block.number)),
            )
        )
    return Catalog(tuple(courses))


def load_catalog(path: str = "") -> Catalog:
    if not path:
        return build_catalog(DEFAULT_CATALOG_DATA)

    with open(path, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
    catalog = build_catalog(data)
    logger.info(f"Loaded catalog with {len(catalog.courses)} course(s) from {path}")
    return catalog


@lru_cache
def get_catalog() -> Catalog:
    from course_access.config import ApplicationConfig

    return load_catalog(ApplicationConfig.CATALOG_FILE)
