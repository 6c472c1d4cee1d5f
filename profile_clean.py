#!/usr/bin/env python3
"""Profile clean_html to find performance bottlenecks."""

import cProfile
import io
import pstats

from sanehtml import clean_html, convert_to_plain_text

# Sample HTML
html = """
<!DOCTYPE html>
<html>
<head><title>Test</title><style>p { margin: 0 }</style></head>
<body>
    <div class="container">
        <p class="MsoNormal">Paragraph <span>1</span><br><br></p>
        <p>Paragraph 2 with a <a href="http://example.com" onclick="x()">link</a></p>
        <ul>
            <li>Item 1</li>
            <li><img src="http://cdn.prtl.eu/a.png" alt="A"></li>
        </ul>
        <script>alert(1)</script>
    </div>
</body>
</html>
""" * 100  # Repeat for more meaningful results

# Profile
pr = cProfile.Profile()
pr.enable()

for _ in range(10):
    cleaned = clean_html(html, "media")
    _ = convert_to_plain_text(cleaned)

pr.disable()

# Print stats
s = io.StringIO()
ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
ps.print_stats(50)  # Top 50 functions
print(s.getvalue())
