"""Vote-related schemas."""
from datetime import datetime
from typing import Optional

from awards.schemas.base import BaseSchema


class CastVoteRequest(BaseSchema):
    """Cast vote request."""

    category_id: int
    nomination_id: int


class VoteDetail(BaseSchema):
    vote_id: int
    user_id: int
    category_id: int
    nomination_id: int
    cast_at: datetime


class VoteCastResponse(BaseSchema):
    message: str
    vote: VoteDetail


class MyVoteCategoriesResponse(BaseSchema):
    category_ids: list[int]


class MyVote(BaseSchema):
    vote_id: int
    category_id: int
    category_name: str
    nomination_id: int
    nominee_name: str
    cast_at: datetime


class MyVotesResponse(BaseSchema):
    votes: list[MyVote]


class CategoryVoteCount(BaseSchema):
    category_id: int
    category_name: str
    vote_count: int


class LeaderboardEntry(BaseSchema):
    rank: int
    nomination_id: int
    nominee_name: str
    organization: Optional[str] = None
    category_id: int
    category_name: str
    vote_count: int
    first_vote_at: Optional[datetime] = None


class VoteAnalyticsResponse(BaseSchema):
    total_votes: int
    unique_voters: int
    votes_by_category: list[CategoryVoteCount]
    top_nominees: list[LeaderboardEntry]


class LeaderboardResponse(BaseSchema):
    category_id: int
    entries: list[LeaderboardEntry]


class CategoryResult(BaseSchema):
    category_id: int
    category_name: str
    winner: Optional[LeaderboardEntry] = None
    standings: list[LeaderboardEntry]


class ResultsResponse(BaseSchema):
    results_announced: bool
    categories: list[CategoryResult]
