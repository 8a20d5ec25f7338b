import random
import re

from chaosazure.common import ConfigError, SelectionError
from logzero import logger
from typing import List, Sequence, Union


def compile_match(pattern: Union[str, re.Pattern]) -> re.Pattern:
    """
    Compile a resource match pattern, raising ConfigError if it is not a valid
    regular expression.
    """
    if hasattr(pattern, 'search'):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigError("Invalid resource match pattern >{}<: "
                          "{}".format(pattern, e)) from e


def filter_resources(resources: Sequence[str],
                     pattern: Union[str, re.Pattern]) -> List[str]:
    """
    Return the resources whose name contains a match for pattern.

    Matching uses search semantics, so anchors must be given explicitly
    (e.g. '^web-') to match against the start of a name.
    """
    regex = compile_match(pattern)
    return [resource for resource in resources if regex.search(resource)]


def select_resource(resources: Sequence[str],
                    pattern: Union[str, re.Pattern] = None,
                    rng=random) -> str:
    """
    Choose a resource at random.

    :param resources: The names of the candidate resources (VMs in a resource
        group). Required.
    :type resources: Sequence[str]
    :param pattern: A regular expression used to filter the candidates before
        choosing one.
        Optional. (Default: None - all candidates are considered)
    :type pattern: Union[str, re.Pattern]
    :param rng: Source of randomness. Anything with a choice method.
        Optional. (Default: the random module)
    :type rng: random.Random
    :return: str
    """
    candidates = list(resources)
    if not candidates:
        raise SelectionError("No resources available to choose from.")

    if pattern is not None:
        candidates = filter_resources(candidates, pattern)
        logger.debug("Resources matching >%s<: %s",
                     getattr(pattern, 'pattern', pattern), candidates)
        if not candidates:
            raise SelectionError("No resources matched >{}<.".format(
                getattr(pattern, 'pattern', pattern)))

    return rng.choice(candidates)
