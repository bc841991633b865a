"""Library layout rule sets."""

from linkgnome.rules.base import RuleSet
from linkgnome.rules.plex import PlexRuleSet, format_episode_id, plan_link

__all__ = ["PlexRuleSet", "RuleSet", "format_episode_id", "plan_link"]
