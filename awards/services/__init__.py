from awards.services.auth_service import AuthService, AuthError
from awards.services.audit_service import AuditService
from awards.services.category_service import CategoryService
from awards.services.email_client import EmailClient, get_email_client
from awards.services.leaderboard_service import LeaderboardService
from awards.services.nomination_service import NominationService
from awards.services.rsvp_service import RSVPService
from awards.services.settings_service import SettingsService
from awards.services.statistics_service import StatisticsService
from awards.services.vote_service import VoteService
from awards.services.voting_window import WindowDecision, evaluate_voting_window

__all__ = [
    "AuthService",
    "AuthError",
    "AuditService",
    "CategoryService",
    "EmailClient",
    "get_email_client",
    "LeaderboardService",
    "NominationService",
    "RSVPService",
    "SettingsService",
    "StatisticsService",
    "VoteService",
    "WindowDecision",
    "evaluate_voting_window",
]
