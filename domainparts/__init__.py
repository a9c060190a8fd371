from .errors import DomainPartsError, SuffixListConfigError, SuffixListDownloadError, SuffixListError
from .extractor import DomainExtractor, ExtractResult
from .scheme import scheme_end_index
from .suffix_list import SuffixLists, parse_suffix_lists
from .trie import SuffixTrie

__all__ = [
    "DomainExtractor",
    "ExtractResult",
    "SuffixTrie",
    "SuffixLists",
    "parse_suffix_lists",
    "scheme_end_index",
    "DomainPartsError",
    "SuffixListError",
    "SuffixListDownloadError",
    "SuffixListConfigError",
]
