"""
Static word lists for passphrase and memorable generation.

Both lists hold distinct lowercase ASCII words.  Passphrase mode draws
four words (7 bits each from 128); memorable mode draws three capitalised
words from its own list.
"""

from __future__ import annotations

PASSPHRASE_WORDS: tuple[str, ...] = (
    "correct", "horse", "battery", "staple", "mountain", "river", "ocean",
    "forest", "thunder", "lightning", "rainbow", "sunset", "sunrise",
    "galaxy", "planet", "comet", "acorn", "phoenix", "unicorn", "wizard",
    "castle", "kingdom", "treasure", "adventure", "journey", "discovery",
    "mystery", "legend", "story", "dream", "vision", "hope",
    "anchor", "harbor", "lantern", "meadow", "canyon", "glacier", "island",
    "valley", "desert", "prairie", "volcano", "tundra", "lagoon", "reef",
    "orchard", "garden", "willow", "cedar", "maple", "birch", "juniper",
    "cactus", "fern", "thistle", "clover", "poppy", "tulip", "orchid",
    "falcon", "otter", "badger", "heron", "walrus", "panther", "gecko",
    "lobster", "pelican", "raven", "sparrow", "beetle", "cricket", "mantis",
    "copper", "silver", "marble", "granite", "quartz", "amber", "cobalt",
    "crimson", "indigo", "saffron", "velvet", "linen", "canvas", "ribbon",
    "compass", "telescope", "lighthouse", "windmill", "bridge", "tunnel",
    "chimney", "balcony", "library", "market", "bakery", "workshop",
    "violin", "trumpet", "cello", "drum", "melody", "rhythm", "chorus",
    "pepper", "ginger", "walnut", "almond", "honey", "biscuit", "noodle",
    "pebble", "boulder", "breeze", "drizzle", "blizzard", "monsoon",
    "eclipse", "nebula", "orbit", "meteor", "zenith", "horizon", "echo",
    "puzzle",
)

MEMORABLE_WORDS: tuple[str, ...] = (
    "brave", "calm", "clever", "eager", "gentle", "happy", "jolly", "kind",
    "lucky", "mighty", "noble", "proud", "quick", "quiet", "rapid", "shiny",
    "silent", "swift", "tidy", "vivid", "witty", "zesty", "bold", "bright",
    "cosmic", "daring", "fancy", "golden", "humble", "icy", "lively",
    "mellow", "nimble", "polar", "royal", "rustic", "sunny", "wild",
    "tiger", "eagle", "wolf", "bear", "fox", "hawk", "lynx", "moose",
    "owl", "panda", "shark", "whale", "zebra", "koala", "lemur", "bison",
    "cobra", "crane", "dove", "finch", "llama", "yak", "robin", "seal",
    "apple", "berry", "cherry", "lemon", "mango", "melon", "olive", "peach",
    "plum", "grape", "kiwi", "lime", "rocket", "castle", "tower", "harbor",
    "forest", "canyon", "meadow", "summit", "galaxy", "comet", "planet",
    "river", "stone", "cloud", "storm", "ember", "frost", "spark", "wave",
    "cliff", "grove", "pearl",
)
