from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional
from .normalize import to_punycode
from .suffix_list import parse_suffix_lists

log = logging.getLogger(__name__)


class TrieNode:
    """One label position of the suffix trie."""
    __slots__ = ("children", "end", "exception", "wildcard")

    def __init__(self):
        self.children: Dict[str, TrieNode] = {}
        self.end = False
        self.exception = False
        self.wildcard: Optional[TrieNode] = None

    def child(self, label: str) -> "TrieNode":
        node = self.children.get(label)
        if node is None:
            node = self.children[label] = TrieNode()
        return node


class SuffixTrie:
    """
    Public suffix rules stored by reversed labels ("co.uk" -> uk -> co).

    A trie is built once and never modified afterwards; replacing the rule set
    means building a new SuffixTrie.
    """

    def __init__(self):
        self.root = TrieNode()
        self.rule_count = 0

    @classmethod
    def from_rules(cls, rules: Iterable[str]) -> "SuffixTrie":
        trie = cls()
        for rule in rules:
            trie._add(rule)
        log.info("Suffix trie built with %d rules", trie.rule_count)
        return trie

    @classmethod
    def from_text(cls, text: str, include_private: bool = True) -> "SuffixTrie":
        lists = parse_suffix_lists(text)
        return cls.from_rules(lists.all if include_private else lists.icann)

    def _add(self, rule: str) -> None:
        rule = rule.strip().lower()
        if not rule:
            return
        self._insert(rule)
        ascii_rule = _ascii_rule(rule)
        if ascii_rule and ascii_rule != rule:
            self._insert(ascii_rule)
        self.rule_count += 1

    def _insert(self, rule: str) -> None:
        exception = rule.startswith("!")
        if exception:
            rule = rule[1:]
        wildcard = rule.startswith("*.")
        if wildcard:
            rule = rule[2:]

        node = self.root
        for label in reversed(rule.split(".")):
            node = node.child(label)

        if wildcard:
            if node.wildcard is None:
                node.wildcard = TrieNode()
            node.wildcard.end = True
        elif exception:
            node.exception = True
        else:
            node.end = True

    def match(self, labels: List[str]) -> int:
        """
        Return how many trailing labels form the public suffix (0 if none).

        Labels are given left to right and must already be lowercase. An
        exception child stops the walk before its own label, taking precedence
        over a wildcard at the same depth.
        """
        node = self.root
        matched = 0
        for depth, label in enumerate(reversed(labels), start=1):
            if not label:
                break
            child = node.children.get(label)
            if child is not None:
                if child.exception:
                    matched = depth - 1
                    break
                if child.end or node.wildcard is not None:
                    matched = depth
                node = child
                continue
            if node.wildcard is not None:
                node = node.wildcard
                matched = depth
                continue
            break
        return matched

    def __len__(self) -> int:
        return self.rule_count


def _ascii_rule(rule: str) -> str:
    prefix = ""
    if rule.startswith("!"):
        prefix, rule = "!", rule[1:]
    elif rule.startswith("*."):
        prefix, rule = "*.", rule[2:]
    labels = [to_punycode(label) for label in rule.split(".")]
    if not all(labels):
        return ""
    return prefix + ".".join(labels)
