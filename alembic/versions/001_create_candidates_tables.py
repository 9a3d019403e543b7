"""candidates / candidate_likes テーブルを作成.

Revision ID: 001
Revises:
Create Date: 2026-10-19

候補者と、ユーザーによる候補者へのいいねを管理するテーブルを作成する。
ステータス（active / locked / hidden）は locked_at / hidden_at から
導出するため、カラムとしては持たない。
"""

from alembic import op


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Apply migration: create candidates and candidate_likes tables."""
    op.execute("""
        -- 1. candidatesテーブルを作成
        CREATE TABLE candidates (
            id SERIAL PRIMARY KEY,
            candidate_id VARCHAR(64) NOT NULL UNIQUE,
            first_name VARCHAR(255) NOT NULL,
            last_name VARCHAR(255) NOT NULL,
            contact_postal TEXT,
            contact_email VARCHAR(320),
            contact_phone VARCHAR(32),
            link_facebook TEXT,
            link_personal TEXT,
            link_twitter TEXT,
            link_wikipedia TEXT,
            program_title TEXT,
            program_body TEXT,
            nominator_user_id VARCHAR(64),
            own_user_id VARCHAR(64),
            accepted_nomination_at TIMESTAMP WITH TIME ZONE,
            locked_at TIMESTAMP WITH TIME ZONE,
            hidden_at TIMESTAMP WITH TIME ZONE,
            comment_ids JSON NOT NULL DEFAULT '[]',
            version INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        );

        -- 2. candidatesのインデックス
        CREATE INDEX idx_candidates_created_at ON candidates(created_at DESC);
        CREATE INDEX idx_candidates_locked_at ON candidates(locked_at DESC);
        CREATE INDEX idx_candidates_hidden_at ON candidates(hidden_at DESC);
        CREATE INDEX idx_candidates_name ON candidates(last_name, first_name);

        -- 3. candidate_likesテーブルを作成
        CREATE TABLE candidate_likes (
            id SERIAL PRIMARY KEY,
            like_uuid UUID NOT NULL UNIQUE,
            candidate_pk INTEGER NOT NULL REFERENCES candidates(id) ON DELETE CASCADE,
            user_id VARCHAR(64) NOT NULL,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP,
            -- 一意制約: 同じ候補者に同じユーザーのいいねは1件のみ
            CONSTRAINT uq_candidate_likes_candidate_user UNIQUE (candidate_pk, user_id)
        );

        -- 4. テーブル・カラムコメントを追加
        COMMENT ON TABLE candidates IS '候補者テーブル: ステータスはlocked_at/hidden_atから導出';
        COMMENT ON COLUMN candidates.candidate_id IS '外部公開用の候補者ID';
        COMMENT ON COLUMN candidates.locked_at IS 'ロック日時（未来日時は予約）';
        COMMENT ON COLUMN candidates.hidden_at IS '非表示日時（未来日時は予約）';
        COMMENT ON COLUMN candidates.version IS '楽観的排他制御用のバージョン';
        COMMENT ON TABLE candidate_likes IS 'いいねテーブル: 候補者ごとに1ユーザー1件';
    """)


def downgrade() -> None:
    """Rollback migration: drop candidate_likes and candidates tables."""
    op.execute("""
        DROP TABLE IF EXISTS candidate_likes CASCADE;
        DROP TABLE IF EXISTS candidates CASCADE;
    """)
