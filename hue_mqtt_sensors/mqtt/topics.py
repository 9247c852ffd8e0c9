"""MQTT topic constants and named-parameter topic patterns."""

from typing import Dict, List, Optional, Union

import paho.mqtt.client as mqtt

TopicParams = Dict[str, Union[str, List[str]]]


class Topics:
    """MQTT topic suffixes, relative to the configured prefix.

    ``+name`` matches one level and captures it as ``name``; ``#name`` matches
    the remaining levels and captures them as a list.
    """

    STATUS = "status/+type/+id"
    FUNCTION = "+function/#"
    SET = "set/+type/+id"
    SET_SUBSCRIPTION = "set/#"


def clean(pattern: str) -> str:
    """Strip parameter names from a pattern, leaving a valid MQTT filter.

    Examples:
        >>> clean("hue-sensors/set/+type/+id")
        'hue-sensors/set/+/+'
    """
    levels = []
    for level in pattern.split("/"):
        if level.startswith("+"):
            levels.append("+")
        elif level.startswith("#"):
            levels.append("#")
        else:
            levels.append(level)
    return "/".join(levels)


def match(pattern: str, topic: str) -> Optional[TopicParams]:
    """Match a topic against a pattern and extract its named parameters.

    Matching follows MQTT filter semantics (a trailing ``#`` also matches the
    parent level). Unnamed wildcards match without being captured.

    Args:
        pattern: Pattern such as "hue-sensors/set/+type/+id"
        topic: Concrete topic such as "hue-sensors/set/CLIPGenericStatus/3"

    Returns:
        Dict of captured parameters, or None if the topic does not match

    Examples:
        >>> match("hue-sensors/set/+type/+id", "hue-sensors/set/CLIPGenericStatus/3")
        {'type': 'CLIPGenericStatus', 'id': '3'}
        >>> match("hue-sensors/set/+type/+id", "hue-sensors/set/bad") is None
        True
    """
    if not mqtt.topic_matches_sub(clean(pattern), topic):
        return None

    params: TopicParams = {}
    topic_levels = topic.split("/")

    for index, level in enumerate(pattern.split("/")):
        if level.startswith("+") and len(level) > 1:
            params[level[1:]] = topic_levels[index]
        elif level.startswith("#"):
            if len(level) > 1:
                params[level[1:]] = topic_levels[index:]
            break

    return params


def fill(pattern: str, params: Dict[str, str]) -> str:
    """Substitute named parameters into a pattern to build a topic.

    Examples:
        >>> fill("hue-sensors/status/+type/+id", {"type": "Daylight", "id": "1"})
        'hue-sensors/status/Daylight/1'
    """
    levels = []
    for level in pattern.split("/"):
        if level.startswith("+") and len(level) > 1:
            levels.append(str(params[level[1:]]))
        elif level.startswith("#") and len(level) > 1:
            value = params.get(level[1:], [])
            levels.extend(value if isinstance(value, list) else [str(value)])
        else:
            levels.append(level)
    return "/".join(levels)
