"""Sites a permit or user can be assigned to."""

REGIONS: tuple[str, ...] = (
    "headquarters",
    "riyadh",
    "qassim",
    "hail",
    "dammam",
    "ahsa",
    "jubail",
    "jouf",
    "northern_borders",
    "jeddah",
    "makkah",
    "medina",
    "tabuk",
    "yanbu",
    "asir",
    "taif",
    "baha",
    "jizan",
    "najran",
)
