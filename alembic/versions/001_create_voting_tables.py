"""Create voting tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Users, elections with their witnesses and candidates, whitelist entries,
ballots and witness exceptions. All timestamps are stored with time zone.
"""

from alembic import op


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Apply migration: create voting tables."""
    op.execute("""
        CREATE TABLE users (
            id SERIAL PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            email VARCHAR(320) NOT NULL,
            password_hash VARCHAR(255) NOT NULL,
            role VARCHAR(20) NOT NULL DEFAULT 'USER'
                CHECK (role IN ('ADMIN', 'USER', 'CANDIDATE', 'WITNESS')),
            is_email_verified BOOLEAN NOT NULL DEFAULT FALSE,
            verification_token VARCHAR(64),
            is_terminated BOOLEAN NOT NULL DEFAULT FALSE,
            identity_document VARCHAR(255),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
        CREATE UNIQUE INDEX uq_users_email ON users (lower(email));
        CREATE UNIQUE INDEX uq_users_verification_token
            ON users (verification_token)
            WHERE verification_token IS NOT NULL;

        CREATE TABLE elections (
            id SERIAL PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            organization VARCHAR(255) NOT NULL,
            description TEXT,
            status VARCHAR(20) NOT NULL DEFAULT 'DRAFT'
                CHECK (status IN ('DRAFT', 'ONGOING', 'FINISH', 'TERMINATE')),
            whitelist_start TIMESTAMPTZ,
            whitelist_end TIMESTAMPTZ,
            vote_start TIMESTAMPTZ,
            vote_end TIMESTAMPTZ,
            public_key TEXT,
            winner_id INTEGER,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
        CREATE INDEX ix_elections_status_vote_end ON elections (status, vote_end);

        CREATE TABLE election_witnesses (
            election_id INTEGER NOT NULL
                REFERENCES elections(id) ON DELETE CASCADE,
            user_id INTEGER NOT NULL REFERENCES users(id),
            PRIMARY KEY (election_id, user_id)
        );

        CREATE TABLE candidates (
            id SERIAL PRIMARY KEY,
            election_id INTEGER NOT NULL
                REFERENCES elections(id) ON DELETE CASCADE,
            lead_id INTEGER NOT NULL REFERENCES users(id),
            deputy_id INTEGER NOT NULL REFERENCES users(id),
            tally INTEGER NOT NULL DEFAULT 0 CHECK (tally >= 0),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CHECK (lead_id <> deputy_id)
        );
        CREATE INDEX ix_candidates_election_id ON candidates (election_id);

        ALTER TABLE elections
        ADD CONSTRAINT fk_elections_winner
        FOREIGN KEY (winner_id) REFERENCES candidates(id);

        CREATE TABLE whitelist_entries (
            id SERIAL PRIMARY KEY,
            election_id INTEGER NOT NULL
                REFERENCES elections(id) ON DELETE CASCADE,
            user_id INTEGER NOT NULL REFERENCES users(id),
            email VARCHAR(320) NOT NULL,
            address VARCHAR(255) NOT NULL,
            status VARCHAR(20) NOT NULL DEFAULT 'PENDING'
                CHECK (status IN ('PENDING', 'ACCEPT', 'DECLINE')),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CONSTRAINT uq_whitelist_entries_user_election
                UNIQUE (user_id, election_id),
            CONSTRAINT uq_whitelist_entries_address_election
                UNIQUE (address, election_id)
        );

        CREATE TABLE ballots (
            id SERIAL PRIMARY KEY,
            candidate_id INTEGER NOT NULL REFERENCES candidates(id),
            whitelist_id INTEGER NOT NULL
                REFERENCES whitelist_entries(id) ON DELETE CASCADE,
            valid BOOLEAN NOT NULL DEFAULT TRUE,
            transaction_ref VARCHAR(255),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CONSTRAINT uq_ballots_whitelist UNIQUE (whitelist_id)
        );

        CREATE TABLE witness_exceptions (
            id SERIAL PRIMARY KEY,
            election_id INTEGER NOT NULL
                REFERENCES elections(id) ON DELETE CASCADE,
            user_id INTEGER NOT NULL REFERENCES users(id),
            note TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
        CREATE INDEX ix_witness_exceptions_election_id
            ON witness_exceptions (election_id);
    """)


def downgrade() -> None:
    """Rollback migration: drop voting tables."""
    op.execute("""
        DROP TABLE IF EXISTS witness_exceptions;
        DROP TABLE IF EXISTS ballots;
        DROP TABLE IF EXISTS whitelist_entries;
        ALTER TABLE elections DROP CONSTRAINT IF EXISTS fk_elections_winner;
        DROP TABLE IF EXISTS candidates;
        DROP TABLE IF EXISTS election_witnesses;
        DROP TABLE IF EXISTS elections;
        DROP TABLE IF EXISTS users;
    """)
