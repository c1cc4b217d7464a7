"""create_quality_assurance_tables

Revision ID: 3b7f1c2a9d04
Revises:
Create Date: 2026-10-19 09:12:44.118204

Creates ai_metrics, ai_alerts, parent_feedback and review_items with the
indexes used by trend, active-alert, flagged-feedback and pending-review queries.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b7f1c2a9d04'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

alert_type = sa.Enum(
    'AI_CONFIDENCE_LOW', 'PARENT_SATISFACTION_LOW', 'CONTENT_FLAG_RATE_HIGH',
    'HUMAN_REVIEW_RATE_HIGH', 'RESPONSE_TIME_HIGH', 'GENERATION_FAILURE_HIGH',
    name='alerttype'
)
alert_severity = sa.Enum('LOW', 'MEDIUM', 'HIGH', 'CRITICAL', name='alertseverity')
review_priority = sa.Enum('LOW', 'MEDIUM', 'HIGH', 'URGENT', name='reviewpriority')
review_status = sa.Enum('PENDING', 'IN_REVIEW', 'APPROVED', 'REJECTED', name='reviewstatus')


def upgrade() -> None:
    """Upgrade schema - create quality assurance tables."""
    op.create_table(
        'ai_metrics',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('generation_success_rate', sa.Float(), nullable=False, comment='0.0-1.0'),
        sa.Column('average_confidence_score', sa.Float(), nullable=False, comment='0.0-1.0'),
        sa.Column('parent_satisfaction_rating', sa.Float(), nullable=False, comment='1.0-5.0'),
        sa.Column('content_flag_rate', sa.Float(), nullable=False, comment='0.0-1.0'),
        sa.Column('human_review_rate', sa.Float(), nullable=False, comment='0.0-1.0'),
        sa.Column('average_response_time_ms', sa.Integer(), nullable=False),
        sa.Column('total_generations', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_ai_metrics_timestamp', 'ai_metrics', ['timestamp'])

    op.create_table(
        'ai_alerts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('alert_type', alert_type, nullable=False),
        sa.Column('severity', alert_severity, nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('metrics', sa.JSON(), nullable=False,
                  comment='Values that triggered the alert'),
        sa.Column('is_resolved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('resolution_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('resolved_at', sa.DateTime(), nullable=True),
    )
    op.create_index('idx_alert_resolved_created', 'ai_alerts', ['is_resolved', 'created_at'])
    op.create_index('idx_alert_type', 'ai_alerts', ['alert_type'])

    op.create_table(
        'parent_feedback',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('question_id', sa.String(), nullable=False),
        sa.Column('parent_id', sa.String(), nullable=False),
        sa.Column('explanation_rating', sa.Float(), nullable=False),
        sa.Column('helpfulness_rating', sa.Float(), nullable=False),
        sa.Column('clarity_rating', sa.Float(), nullable=False),
        sa.Column('age_appropriate_rating', sa.Float(), nullable=False),
        sa.Column('overall_satisfaction', sa.Float(), nullable=False,
                  comment='Mean of the four ratings'),
        sa.Column('flagged_for_review', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_parent_feedback_question_id', 'parent_feedback', ['question_id'])
    op.create_index('ix_parent_feedback_parent_id', 'parent_feedback', ['parent_id'])
    op.create_index('idx_feedback_submitted', 'parent_feedback', ['submitted_at'])
    op.create_index(
        'idx_feedback_flagged', 'parent_feedback', ['flagged_for_review', 'overall_satisfaction']
    )

    op.create_table(
        'review_items',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('question_id', sa.String(), nullable=False),
        sa.Column('question_text', sa.Text(), nullable=False),
        sa.Column('correct_answer', sa.String(100), nullable=False),
        sa.Column('quality_assessment', sa.JSON(), nullable=False,
                  comment='overall_quality + flags'),
        sa.Column('priority', review_priority, nullable=False),
        sa.Column('review_status', review_status, nullable=False),
        sa.Column('reviewer_id', sa.String(), nullable=True),
        sa.Column('reviewer_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('review_started_at', sa.DateTime(), nullable=True),
        sa.Column('review_completed_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_review_items_question_id', 'review_items', ['question_id'])
    op.create_index('ix_review_items_reviewer_id', 'review_items', ['reviewer_id'])
    op.create_index(
        'idx_review_status_priority_created',
        'review_items',
        ['review_status', 'priority', 'created_at']
    )


def downgrade() -> None:
    """Downgrade schema - drop quality assurance tables."""
    op.drop_table('review_items')
    op.drop_table('parent_feedback')
    op.drop_table('ai_alerts')
    op.drop_table('ai_metrics')
    bind = op.get_bind()
    for enum_type in (review_status, review_priority, alert_severity, alert_type):
        enum_type.drop(bind, checkfirst=True)
