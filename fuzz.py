#!/usr/bin/env python3
"""
Random fuzzer for clean_html.
Generates invalid/malformed HTML and checks that cleaning never crashes
(MalformedHTML is the only accepted failure) and is idempotent.
"""

import argparse
import random
import string
import sys
import time
import traceback

from sanehtml import FilterSet, MalformedHTML, clean_html

TAGS = [
    "div", "span", "p", "a", "img", "table", "tr", "td", "ul", "ol", "li",
    "script", "style", "head", "body", "html", "title", "br", "hr", "h1", "h4",
    "h6", "em", "strong", "u", "del", "video", "source", "track", "embed",
    "iframe", "object", "svg", "math", "template", "noscript", "pre", "o:p",
]

ATTRIBUTES = [
    "id", "class", "style", "href", "src", "alt", "title", "name", "target",
    "width", "height", "data-id", "data-src", "data-align", "onclick", "onerror",
]

URL_VALUES = [
    "http://example.com", "https://example.com/a?b=c:d", "javascript:alert(1)",
    "JaVaScRiPt:alert(1)", "java\tscript:alert(1)", "#top", "/relative", "//cdn.prtl.eu/x",
    "http://cdn.prtl.eu/x.png", "mailto:a@example.com", "data:text/html,x", "", " ",
]

CLASS_VALUES = ["MsoNormal", "MsoNormal foo", "foo  bar", "Mso", "msoNormal", ""]

SPECIAL_CHARS = [
    "\x00", "\x0b", "\x0c", "\u00a0", "\u2028", "\u200b", "\ufeff", "\ufffd",
]

ENTITIES = [
    "&amp;", "&lt;", "&gt;", "&quot;", "&nbsp;", "&", "&#", "&#x", "&#10;",
    "&#9;", "&#xdeadbeef;", "&unknown;", "&eacute;",
]


def random_string(min_len=0, max_len=12):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_whitespace():
    return "".join(random.choices([" ", "\t", "\n", "\r", "\f", ""], k=random.randint(0, 4)))


def fuzz_text():
    parts = []
    for _ in range(random.randint(0, 4)):
        parts.append(random.choice([
            random_string,
            random_whitespace,
            lambda: random.choice(ENTITIES),
            lambda: random.choice(SPECIAL_CHARS),
            lambda: random.choice(["<br>", "<br/>", "<BR>", "> <", "<", ">"]),
        ])())
    return "".join(parts)


def fuzz_attribute():
    name = random.choice(ATTRIBUTES + [random_string(1, 6)])
    if name in {"href", "src"}:
        value = random.choice(URL_VALUES)
    elif name == "class":
        value = random.choice(CLASS_VALUES)
    else:
        value = fuzz_text()
    quote = random.choice(['"', "'", ""])
    if not quote:
        return f"{name}={value.replace(' ', '')}" if value else name
    return f"{name}={quote}{value}{quote}"


def fuzz_element(depth=0):
    tag = random.choice(TAGS)
    if random.random() < 0.2:
        tag = tag.upper()
    attrs = " ".join(fuzz_attribute() for _ in range(random.randint(0, 3)))
    start = f"<{tag} {attrs}>" if attrs else f"<{tag}>"

    children = []
    if depth < 6:
        for _ in range(random.randint(0, 4)):
            roll = random.random()
            if roll < 0.4:
                children.append(fuzz_element(depth + 1))
            elif roll < 0.9:
                children.append(fuzz_text())
            else:
                children.append(f"<!--{random_string()}-->")

    # Sometimes leave elements unclosed or close the wrong tag
    roll = random.random()
    if roll < 0.1:
        end = ""
    elif roll < 0.15:
        end = f"</{random.choice(TAGS)}>"
    else:
        end = f"</{tag}>"
    return start + "".join(children) + end


def generate_fuzzed_html():
    return "".join(
        fuzz_element() if random.random() < 0.7 else fuzz_text()
        for _ in range(random.randint(1, 5))
    )


def run_fuzzer(num_tests=1000, seed=None, verbose=False):
    """Run the fuzzer over every filter set."""
    if seed is not None:
        random.seed(seed)

    crashes = []
    unstable = []
    rejected = 0

    print(f"Fuzzing clean_html with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        html = generate_fuzzed_html()
        filter_set = random.choice(list(FilterSet))

        try:
            once = clean_html(html, filter_set)
            twice = clean_html(once, filter_set)
        except MalformedHTML:
            rejected += 1
            continue
        except Exception as e:
            crashes.append({
                "test_num": i,
                "html": html,
                "filter_set": filter_set.value,
                "error": str(e),
                "traceback": traceback.format_exc(),
            })
            if verbose:
                print(f"  CRASH: Test {i}: {e}")
            continue

        if once != twice:
            unstable.append({
                "test_num": i,
                "html": html,
                "filter_set": filter_set.value,
                "once": once,
                "twice": twice,
            })
            if verbose:
                print(f"  UNSTABLE: Test {i}")

    elapsed_total = time.time() - start_time

    print(f"\n{'='*60}")
    print("FUZZING RESULTS")
    print(f"{'='*60}")
    print(f"Total tests:    {num_tests}")
    print(f"Rejected:       {rejected}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Not idempotent: {len(unstable)}")
    print(f"Total time:     {elapsed_total:.2f}s")

    for crash in crashes[:10]:
        print(f"\nCrash #{crash['test_num']} ({crash['filter_set']}):")
        print(f"  HTML: {crash['html'][:200]!r}")
        print(f"  Error: {crash['error']}")
        if verbose:
            print(crash["traceback"])

    for case in unstable[:10]:
        print(f"\nUnstable #{case['test_num']} ({case['filter_set']}):")
        print(f"  HTML:  {case['html'][:200]!r}")
        print(f"  Once:  {case['once'][:200]!r}")
        print(f"  Twice: {case['twice'][:200]!r}")

    return not crashes and not unstable


def main():
    parser = argparse.ArgumentParser(description="Fuzz clean_html with invalid input")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of test cases to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed HTML documents (no cleaning)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed is not None:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i+1} ===")
            print(generate_fuzzed_html())
            print()
        return

    success = run_fuzzer(args.num_tests, seed=args.seed, verbose=args.verbose)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
