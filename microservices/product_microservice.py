from typing import List
from bson import ObjectId
from rapidfuzz import process, utils

SEARCH_THRESHOLD = 85


def to_object_ids(ids: List[str]):
    # ids that are not valid ObjectIds can never match a product, so they are dropped
    return [ObjectId(id) for id in ids if ObjectId.is_valid(id)]


def stringify_id(document):
    document["_id"] = str(document["_id"])
    return document


def search_words(product):
    # words a search is matched against: name words, category and tags
    words = [word for word in str(product.get("name", "")).split() if len(word) > 2]
    if product.get("category"):
        words.append(str(product["category"]))
    tags = product.get("filterTags") or product.get("tags") or []
    words += [tag for tag in tags if isinstance(tag, str) and len(tag) > 1]
    return words


def match_products(search: str, products):
    # keeps products whose best word scores above the threshold, best first
    scored = []
    for product in products:
        words = search_words(product)
        if not words:
            continue
        match = process.extractOne(search, words, processor=utils.default_process)
        if match and match[1] > SEARCH_THRESHOLD:
            scored.append((match[1], product))
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [product for _, product in scored]
