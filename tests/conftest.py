"""Shared fixtures: canned pkg.go.dev pages and module index feeds."""

from __future__ import annotations

import pytest

BASE_URL = "https://pkg.go.dev"
INDEX_URL = "https://index.golang.org/index"

PACKAGE_HTML = """
<!DOCTYPE html>
<html>
<head>
  <title>json package - encoding/json - Go Packages</title>
  <meta name="description" content="Package json implements encoding and decoding of JSON.">
</head>
<body>
  <div class="Documentation-version">go1.21.0</div>
  <section class="Documentation-overview">
    <p>Package json implements encoding and decoding of JSON as defined in RFC 7159.</p>
  </section>
  <div id="readme"><h2>encoding/json</h2><p>Readme text.</p></div>
  <ul class="Directories-list">
    <li><a href="/encoding/json/internal">internal</a></li>
    <li><a href="/encoding/json/v2"> v2 </a></li>
  </ul>
  <ul class="Documentation-imports">
    <li><a href="/bytes">bytes</a></li>
    <li><a href="/errors">errors</a></li>
  </ul>

  <div data-kind="function">
    <div class="Documentation-functionHeader"><h4 id="Marshal">func Marshal</h4></div>
    <div class="Documentation-declaration"><pre>func Marshal(v any) ([]byte, error)</pre></div>
    <div class="Documentation-content">Marshal returns the JSON encoding of v.</div>
    <details class="Documentation-exampleDetails">
      <summary class="Documentation-exampleDetailsHeader">Example (Marshal)</summary>
      <div class="Documentation-exampleCode"><pre>b, _ := json.Marshal(x)</pre></div>
      <div class="Documentation-exampleOutput"><pre>{"a":1}</pre></div>
    </details>
  </div>

  <div data-kind="function">
    <div class="Documentation-functionHeader"><h4 id="Valid">func Valid</h4></div>
    <div class="Documentation-declaration"><pre></pre></div>
  </div>

  <div data-kind="type">
    <div class="Documentation-typeHeader"><h4 id="Decoder">type Decoder</h4></div>
    <div class="Documentation-declaration"><pre>type Decoder struct {
	// contains filtered or unexported fields
}</pre></div>
    <div class="Documentation-content">A Decoder reads and decodes JSON values from an input stream.</div>
  </div>

  <div data-kind="method">
    <div class="Documentation-functionHeader"><h4 id="Decoder.Decode">func (*Decoder) Decode</h4></div>
    <div class="Documentation-declaration"><pre>func (dec *Decoder) Decode(v any) error</pre></div>
    <div class="Documentation-content">Decode reads the next JSON-encoded value.</div>
  </div>
  <div data-kind="method">
    <div class="Documentation-functionHeader"><h4 id="Decoder.More">func (*Decoder) More</h4></div>
    <div class="Documentation-declaration"><pre>func (dec *Decoder) More() bool</pre></div>
  </div>
  <div data-kind="method">
    <div class="Documentation-functionHeader"><h4 id="Encoder.Encode">func (*Encoder) Encode</h4></div>
    <div class="Documentation-declaration"><pre>func (enc *Encoder) Encode(v any) error</pre></div>
  </div>

  <div class="Documentation-example">
    <div class="Documentation-exampleHeader">Example (CustomMarshalJSON)</div>
    <div class="Documentation-exampleCode"><pre>fmt.Println("custom")</pre></div>
    <div class="Documentation-exampleOutput"><pre>custom</pre></div>
  </div>
  <div class="Documentation-example">
    <div class="Documentation-exampleCode"><pre>fmt.Println("unnamed")</pre></div>
    <div class="Documentation-exampleOutput"><pre></pre></div>
  </div>
  <div class="Documentation-example">
    <div class="Documentation-exampleHeader">Example (Empty)</div>
  </div>
</body>
</html>
"""

# Current pkg.go.dev markup: the kind marker sits on the header itself and the
# declaration is a sibling inside the enclosing div.
HEADER_STYLE_HTML = """
<html><body>
  <div class="Documentation-function">
    <h4 tabindex="-1" id="NewDecoder" data-kind="function" class="Documentation-functionHeader">
      func <a href="#NewDecoder">NewDecoder</a>
    </h4>
    <div class="Documentation-declaration"><pre>func NewDecoder(r io.Reader) *Decoder</pre></div>
    <p>NewDecoder returns a new decoder that reads from r.</p>
    <p>The decoder introduces its own buffering.</p>
  </div>
  <div class="Documentation-type">
    <h4 tabindex="-1" id="Encoder" data-kind="type" class="Documentation-typeHeader">type Encoder</h4>
    <div class="Documentation-declaration"><pre>type Encoder struct {}</pre></div>
    <p>An Encoder writes JSON values to an output stream.</p>
    <div class="Documentation-typeMethod">
      <h4 tabindex="-1" id="Encoder.SetIndent" data-kind="method"
          class="Documentation-typeMethodHeader">func (*Encoder) SetIndent</h4>
      <div class="Documentation-declaration"><pre>func (enc *Encoder) SetIndent(prefix, indent string)</pre></div>
      <p>SetIndent instructs the encoder to format each value.</p>
    </div>
  </div>
  <details class="Documentation-exampleDetails">
    <summary class="Documentation-exampleDetailsHeader">Example (Indent)</summary>
    <textarea class="Documentation-exampleCode">json.Indent(&amp;out, b, "", "\\t")</textarea>
    <pre><span class="Documentation-exampleOutput">indented</span></pre>
  </details>
</body></html>
"""

SEARCH_HTML = """
<html><body>
  <div class="SearchSnippet">
    <h2><a href="/github.com/gorilla/mux">mux (github.com/gorilla/mux)</a></h2>
    <p class="SearchSnippet-synopsis">Package mux implements a request router.</p>
  </div>
  <div class="SearchSnippet">
    <h2><a href="/github.com/gorilla/mux@v1.8.1">mux duplicate</a></h2>
  </div>
  <div class="SearchSnippet">
    <h2><a href="/github.com/go-chi/chi/v5">chi</a></h2>
  </div>
  <div class="SearchSnippet"><h2>no link here</h2></div>
  <article><a href="/should/not/appear">article result</a></article>
</body></html>
"""

SEARCH_FALLBACK_HTML = """
<html><body>
  <article>
    <a href="/github.com/sirupsen/logrus">logrus</a>
    <p>Structured logger for Go.</p>
  </article>
</body></html>
"""

FEED_LINES = [
    '{"Path":"github.com/stable/pkg","Version":"v1.8.0","Timestamp":"2022-06-01T00:00:00Z"}',
    '{"Path":"github.com/stable/pkg","Version":"v1.9.1","Timestamp":"2023-06-01T00:00:00Z"}',
    '{"Path":"github.com/stable/pkg","Version":"v1.9.0","Timestamp":"2023-01-01T00:00:00Z"}',
    '{"path":"github.com/pre/pkg","version":"v2.0.0-beta.1","timestamp":"2023-09-01T00:00:00Z"}',
    '{"path":"github.com/pre/pkg","version":"v1.9.0","timestamp":"2023-01-01T00:00:00Z"}',
    '{"PATH":"github.com/alpha/pkg","VERSION":"v2.0.0-alpha.1","TIMESTAMP":"2023-03-01T00:00:00Z"}',
    '{"Path":"github.com/acme/JSON-tools","Version":"v0.1.0","Timestamp":"2021-01-01T00:00:00Z"}',
    '{"Path":"github.com/acme/jsonpath","Version":"v1.0.0","Timestamp":"2021-02-01T00:00:00Z"}',
    '{"Path":"github.com/acme/Json5","Version":"v0.2.0-rc.1","Timestamp":"2021-03-01T00:00:00Z"}',
]


@pytest.fixture()
def package_html() -> str:
    return PACKAGE_HTML


@pytest.fixture()
def header_style_html() -> str:
    return HEADER_STYLE_HTML


@pytest.fixture()
def search_html() -> str:
    return SEARCH_HTML


@pytest.fixture()
def feed_text() -> str:
    return "\n".join(FEED_LINES) + "\n"
