from .records import (MalformedRecord, RecordParser, parse_record,
                      open_records, write_records, extract_mapped)
from .parents import (MissingParentMapping, ParentResolver,
                      MappedParentResolver, TokenParentResolver,
                      PrefixParentResolver, build_resolver)
from .selection import (group_by_parent, select_best,
                        select_best_fragments, write_read_ids)
from .coordinates import (FlagPolicy, FlagTextPolicy, FlagBitPolicy,
                          build_policy, resolve_coordinate, resolve_sites)
from .sites import count_sites, merge_counts, rank_sites, build_site_tables
