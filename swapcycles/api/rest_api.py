"""
REST API implementation for the SwapCycles platform using FastAPI.
"""

import json
import threading
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone
from pydantic import BaseModel, Field

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..core.entities import Student, Section
from ..core.enums import ReportFormat
from ..core.exceptions import (
    ValidationError, ResourceNotFoundError, DuplicateEntityError, ConcurrencyError
)
from ..persistence import StudentRegistry, SectionRegistry
from ..services import CycleFinder, EnrollmentService, GraphReporter


# Pydantic models for API
class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class StudentResponse(BaseModel):
    name: str
    preferences: List[str] = []
    current_section: Optional[str] = None
    version: int


class SectionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class SectionResponse(BaseModel):
    name: str
    students: List[str] = []
    enrolled_count: int
    version: int


class EnrollmentRequest(BaseModel):
    student_id: str = Field(..., min_length=1)
    section_id: str = Field(..., min_length=1)


class EnrollmentResponse(BaseModel):
    success: bool
    message: str
    status: str
    section_id: Optional[str] = None


class PreferenceRequest(BaseModel):
    section_id: str = Field(..., min_length=1)


class CurrentSectionResponse(BaseModel):
    student_id: str
    section_id: Optional[str] = None


class SwapResponse(BaseModel):
    student_x: str
    student_y: str
    wants_swap: bool


class CycleCountResponse(BaseModel):
    student_id: str
    found: bool
    unique_cycles: int
    cycle_keys: List[str] = []
    message: str = ""


class SwapCycleRestAPI:
    """REST API over the swap graph."""

    def __init__(self, students: StudentRegistry, sections: SectionRegistry,
                 enrollment_service: EnrollmentService, cycle_finder: CycleFinder,
                 reporter: GraphReporter):
        self._students = students
        self._sections = sections
        self._enrollment_service = enrollment_service
        self._cycle_finder = cycle_finder
        self._reporter = reporter

        self._lock = threading.RLock()

        self.app = FastAPI(
            title="SwapCycles API",
            description="Section swap-cycle detection for student enrollments",
            version=__version__,
            docs_url="/docs",
            redoc_url="/redoc"
        )

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/", response_model=Dict[str, str])
        async def root():
            """Root endpoint."""
            return {
                "message": "SwapCycles API",
                "version": __version__,
                "docs": "/docs"
            }

        @self.app.get("/health", response_model=Dict[str, str])
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        # Student endpoints
        @self.app.post("/students", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
        async def create_student(student_data: StudentCreate):
            """Register a new student."""
            with self._lock:
                try:
                    student = self._enrollment_service.register_student(student_data.name)
                except ValidationError as e:
                    raise HTTPException(status_code=400, detail=e.message)
                except (DuplicateEntityError, ConcurrencyError) as e:
                    raise HTTPException(status_code=409, detail=e.message)
                return self._student_to_response(student)

        @self.app.get("/students", response_model=List[StudentResponse])
        async def list_students(skip: int = 0, limit: int = 100):
            """List all students."""
            with self._lock:
                students = self._students.find_all()[skip:skip + limit]
                return [self._student_to_response(student) for student in students]

        @self.app.get("/students/{student_id}", response_model=StudentResponse)
        async def get_student(student_id: str):
            """Get a student by name."""
            with self._lock:
                student = self._students.find_by_id(student_id)
                if not student:
                    raise HTTPException(status_code=404, detail="Student not found")
                return self._student_to_response(student)

        @self.app.get("/students/{student_id}/section", response_model=CurrentSectionResponse)
        async def get_current_section(student_id: str):
            """Get the section a student currently holds."""
            with self._lock:
                if student_id not in self._students:
                    raise HTTPException(status_code=404, detail="Student not found")
                return CurrentSectionResponse(
                    student_id=student_id,
                    section_id=self._cycle_finder.current_section(student_id)
                )

        @self.app.post("/students/{student_id}/preferences", response_model=StudentResponse)
        async def add_preference(student_id: str, preference: PreferenceRequest):
            """Append a section to a student's preferences."""
            with self._lock:
                try:
                    student = self._enrollment_service.add_preference(student_id, preference.section_id)
                except ResourceNotFoundError as e:
                    raise HTTPException(status_code=404, detail=e.message)
                except ValidationError as e:
                    raise HTTPException(status_code=400, detail=e.message)
                except ConcurrencyError as e:
                    raise HTTPException(status_code=409, detail=e.message)
                return self._student_to_response(student)

        @self.app.get("/students/{student_id}/cycles", response_model=CycleCountResponse)
        async def count_cycles(student_id: str):
            """Count unique swap cycles through a student.

            An unknown student is reported in the body, not as an HTTP error.
            """
            with self._lock:
                try:
                    result = self._cycle_finder.find_cycles(student_id)
                except ConcurrencyError as e:
                    raise HTTPException(status_code=409, detail=e.message)
                return CycleCountResponse(
                    student_id=result.student_id,
                    found=result.found,
                    unique_cycles=result.count,
                    cycle_keys=result.cycle_keys,
                    message=result.message
                )

        # Section endpoints
        @self.app.post("/sections", response_model=SectionResponse, status_code=status.HTTP_201_CREATED)
        async def create_section(section_data: SectionCreate):
            """Create a new section."""
            with self._lock:
                try:
                    section = self._enrollment_service.create_section(section_data.name)
                except ValidationError as e:
                    raise HTTPException(status_code=400, detail=e.message)
                except (DuplicateEntityError, ConcurrencyError) as e:
                    raise HTTPException(status_code=409, detail=e.message)
                return self._section_to_response(section)

        @self.app.get("/sections", response_model=List[SectionResponse])
        async def list_sections():
            """List all sections."""
            with self._lock:
                return [self._section_to_response(section) for section in self._sections.find_all()]

        @self.app.get("/sections/{section_id}", response_model=SectionResponse)
        async def get_section(section_id: str):
            """Get a section by name."""
            with self._lock:
                section = self._sections.find_by_id(section_id)
                if not section:
                    raise HTTPException(status_code=404, detail="Section not found")
                return self._section_to_response(section)

        # Enrollment endpoints
        @self.app.post("/enrollments", response_model=EnrollmentResponse)
        async def enroll_student(enrollment_data: EnrollmentRequest):
            """Enroll a student in a section."""
            with self._lock:
                try:
                    result = self._enrollment_service.enroll_student(
                        enrollment_data.student_id, enrollment_data.section_id
                    )
                except ResourceNotFoundError as e:
                    raise HTTPException(status_code=404, detail=e.message)
                except ConcurrencyError as e:
                    raise HTTPException(status_code=409, detail=e.message)
                return EnrollmentResponse(
                    success=result.success,
                    message=result.message,
                    status=result.status.value,
                    section_id=result.section_id
                )

        @self.app.get("/swaps/{student_x}/{student_y}", response_model=SwapResponse)
        async def wants_swap(student_x: str, student_y: str):
            """Check whether two students want each other's section."""
            with self._lock:
                return SwapResponse(
                    student_x=student_x,
                    student_y=student_y,
                    wants_swap=self._cycle_finder.wants_swap(student_x, student_y)
                )

        @self.app.get("/graph", response_model=Dict[str, Any])
        async def get_graph():
            """Get the whole graph as JSON."""
            with self._lock:
                return json.loads(self._reporter.generate_report(ReportFormat.JSON))

        @self.app.get("/statistics", response_model=Dict[str, Any])
        async def get_statistics():
            """Get enrollment statistics."""
            with self._lock:
                return self._enrollment_service.get_statistics()

    def _student_to_response(self, student: Student) -> StudentResponse:
        """Convert Student entity to response model."""
        return StudentResponse(
            name=student.id,
            preferences=student.preferences,
            current_section=self._cycle_finder.current_section(student.id),
            version=student.version
        )

    def _section_to_response(self, section: Section) -> SectionResponse:
        """Convert Section entity to response model."""
        return SectionResponse(
            name=section.id,
            students=sorted(section.students),
            enrolled_count=section.enrolled_count,
            version=section.version
        )
