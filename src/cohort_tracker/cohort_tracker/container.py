from __future__ import annotations

from dataclasses import dataclass

from .activeness.mysql_activeness_repository import MySQLActivenessRepository
from .activeness.repository import ActivenessRepository
from .activeness.service import ActivenessService
from .admins.mysql_admin_repository import MySQLAdminRepository
from .admins.repository import AdminRepository
from .admins.service import AuthService
from .attendance.dashboard import AttendanceDashboardService
from .attendance.flow import AttendanceFlow
from .attendance.mysql_attendance_repository import MySQLRecordRepository, MySQLSessionRepository
from .attendance.repository import RecordRepository, SessionRepository
from .attendance.service import AttendanceSessionService
from .core.constants import DEFAULT_AUTH_SESSION_HOURS, DEFAULT_SESSION_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .interviews.mysql_interview_repository import MySQLInterviewRepository
from .interviews.repository import InterviewRepository
from .interviews.service import InterviewService


@dataclass(frozen=True)
class Container:
    admins_repo: AdminRepository
    interviews_repo: InterviewRepository
    activeness_repo: ActivenessRepository
    sessions_repo: SessionRepository
    records_repo: RecordRepository

    auth_service: AuthService
    interview_service: InterviewService
    activeness_service: ActivenessService
    session_service: AttendanceSessionService
    dashboard_service: AttendanceDashboardService

    def new_attendance_flow(self) -> AttendanceFlow:
        """A fresh flow per page load (never shared between requests)."""
        return AttendanceFlow(self.sessions_repo, self.records_repo)


def build_services(
    *,
    admins_repo: AdminRepository,
    interviews_repo: InterviewRepository,
    activeness_repo: ActivenessRepository,
    sessions_repo: SessionRepository,
    records_repo: RecordRepository,
    session_hours: int = DEFAULT_SESSION_HOURS,
    auth_session_hours: float = DEFAULT_AUTH_SESSION_HOURS,
) -> Container:
    return Container(
        admins_repo=admins_repo,
        interviews_repo=interviews_repo,
        activeness_repo=activeness_repo,
        sessions_repo=sessions_repo,
        records_repo=records_repo,
        auth_service=AuthService(admins_repo, session_hours=auth_session_hours),
        interview_service=InterviewService(interviews_repo),
        activeness_service=ActivenessService(activeness_repo),
        session_service=AttendanceSessionService(sessions_repo, default_hours=session_hours),
        dashboard_service=AttendanceDashboardService(sessions_repo, records_repo),
    )


def build_container(
    *,
    db_config: dict,
    session_hours: int = DEFAULT_SESSION_HOURS,
    auth_session_hours: float = DEFAULT_AUTH_SESSION_HOURS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        admins_repo=MySQLAdminRepository(conn),
        interviews_repo=MySQLInterviewRepository(conn),
        activeness_repo=MySQLActivenessRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        records_repo=MySQLRecordRepository(conn),
        session_hours=session_hours,
        auth_session_hours=auth_session_hours,
    )
