import random
import re

from chaosazure.common import ConfigError, DEFAULT_CHAOS_DELAY
from logzero import logger

INTEGER = re.compile(r'^-?[0-9]+$')
DIGITS = re.compile(r'^[0-9]+$')


def parse_delay(delay: str = None, rng=random) -> int:
    """
    Compute the number of seconds to wait between the two halves of a
    compound operation (powercycle).

    The delay is either a single integer or a MIN-MAX range. A range yields a
    random integer drawn uniformly from MIN to MAX, both inclusive.

    :param delay: An integer or MIN-MAX range, as given on the command line.
        Optional. (Default: chaosazure.common.DEFAULT_CHAOS_DELAY)
    :type delay: str
    :param rng: Source of randomness. Anything with a randint method.
        Optional. (Default: the random module)
    :type rng: random.Random
    :return: int
    """
    if not delay:
        logger.debug("No delay given. Defaulting to %d seconds",
                     DEFAULT_CHAOS_DELAY)
        return DEFAULT_CHAOS_DELAY

    if INTEGER.match(delay):
        seconds = int(delay)
        if seconds <= 0:
            raise ConfigError("The delay must be a positive number of "
                              "seconds. Got: {}".format(delay))
        return seconds

    bounds = delay.split('-')
    if len(bounds) != 2 or not all(DIGITS.match(b) for b in bounds):
        raise ConfigError("A delay range requires two numbers of the form "
                          "X-Y. Got: {}".format(delay))

    minimum, maximum = int(bounds[0]), int(bounds[1])
    if maximum <= minimum:
        raise ConfigError("A delay range must be specified as MIN-MAX, with "
                          "MAX strictly greater than MIN. Got: "
                          "{}".format(delay))
    if minimum <= 0:
        raise ConfigError("The lower bound of a delay range must be a "
                          "positive number of seconds. Got: {}".format(delay))

    seconds = rng.randint(minimum, maximum)
    logger.debug("Picked a delay of %d seconds from range %d-%d", seconds,
                 minimum, maximum)
    return seconds
