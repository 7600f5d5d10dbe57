"""Shared type definitions for type checking.

Uses NewType for IDs to provide compile-time type safety - prevents mixing
different ID types (e.g., passing a Slack user ID where a Clubhouse member
ID is expected).

Uses TypeAlias for simple structural types.
"""

from typing import NewType, TypeAlias

# ID types using NewType for type safety
# Clubhouse member IDs are UUID strings, Slack user IDs look like "U024BE7LH"
TrackingUserID = NewType("TrackingUserID", str)
ChatUserID = NewType("ChatUserID", str)

# Structural aliases using TypeAlias
TeamID: TypeAlias = int
EmailList: TypeAlias = list[str]
Timestamp: TypeAlias = str  # RFC3339 format
