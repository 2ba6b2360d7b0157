"""
Creator Manager ARC crediting.

Scores a single post with the ARC formula and adds the resulting points
to a creator's total in a Creator Manager program.
"""

from typing import Optional
import bittensor as bt

from arc.clients import ArcStore
from arc.utils.error_handling import log_and_raise_validation_error, ErrorMessages

from .content_scorer import score_post
from .models import AddArcPointsResult, ArcScoringInput, ScoredPost


def calculate_arc_points_detailed(scoring_input: ArcScoringInput) -> ScoredPost:
    """Full scoring breakdown for a Creator Manager post."""
    engagement = scoring_input.engagement
    return score_post(
        tweet_id=scoring_input.tweet_id or '',
        content_type=scoring_input.content_type,
        sentiment=scoring_input.sentiment,
        likes=engagement.likes,
        retweets=engagement.retweets,
        quotes=engagement.quotes,
        replies=engagement.replies
    )


def calculate_arc_points_for_creator_manager(scoring_input: ArcScoringInput) -> int:
    return calculate_arc_points_detailed(scoring_input).delta_points


def add_arc_points_for_creator_manager(
    program_id: str,
    creator_profile_id: str,
    points_to_add: int,
    store: Optional[ArcStore] = None
) -> AddArcPointsResult:
    """
    Increment a creator's arc_points in a Creator Manager program.

    Storage failures are reported in the result, never raised.

    Raises:
        ValueError: If points_to_add is negative
    """
    if points_to_add < 0:
        log_and_raise_validation_error(
            ErrorMessages.NEGATIVE_POINTS,
            {'program_id': program_id, 'creator_profile_id': creator_profile_id, 'points': points_to_add}
        )

    try:
        store = store if store is not None else ArcStore()
        creator = store.get_creator_manager_creator(program_id, creator_profile_id)
        if not creator:
            return AddArcPointsResult(
                success=False,
                points_awarded=0,
                new_total_points=0,
                error=ErrorMessages.CREATOR_NOT_FOUND
            )

        current_points = creator.get('arc_points') or 0
        new_total_points = current_points + points_to_add

        try:
            store.update_creator_manager_points(program_id, creator_profile_id, new_total_points)
        except Exception as e:
            bt.logging.error(f"Error updating Creator Manager ARC points: {e}")
            return AddArcPointsResult(
                success=False,
                points_awarded=0,
                new_total_points=current_points,
                error=str(e)
            )

        bt.logging.info(
            f"Creator Manager points for {creator_profile_id} in {program_id}: "
            f"{current_points} → {new_total_points} (+{points_to_add})"
        )
        return AddArcPointsResult(
            success=True,
            points_awarded=points_to_add,
            new_total_points=new_total_points
        )

    except Exception as e:
        bt.logging.error(f"Creator Manager crediting failed: {e}")
        return AddArcPointsResult(
            success=False,
            points_awarded=0,
            new_total_points=0,
            error=str(e) or ErrorMessages.INTERNAL_ERROR
        )


def score_and_add_arc_points(
    program_id: str,
    creator_profile_id: str,
    scoring_input: ArcScoringInput,
    store: Optional[ArcStore] = None
) -> AddArcPointsResult:
    """Score a post and credit the points in one step."""
    points_to_add = calculate_arc_points_for_creator_manager(scoring_input)
    return add_arc_points_for_creator_manager(program_id, creator_profile_id, points_to_add, store=store)
