from .records import (  # noqa: F401
    Address,
    Assessment,
    Building,
    DataSources,
    Environmental,
    Legal,
    Location,
    Lot,
    MailingAddress,
    Market,
    MergedRecord,
    Owner,
    PartialPropertyRecord,
    School,
    Schools,
    Section,
    Utilities,
    Zoning,
    iter_leaves,
    section_fields,
)
from .provenance import Confidence, ProvenanceEntry, ProvenanceMap  # noqa: F401
