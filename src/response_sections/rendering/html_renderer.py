from __future__ import annotations

from jinja2 import Template

from response_sections.models import SurfaceDocument

_HTML_TEMPLATE = """
{%- macro inline(spans) -%}
{%- for span in spans -%}
{%- if span.strong %}<strong>{{ span.text }}</strong>{% else %}{{ span.text }}{% endif -%}
{%- endfor -%}
{%- endmacro -%}
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>{{ doc.title }}</title>
  </head>
  <body>
    <main>
      <header>
        <h1>{{ doc.title }}</h1>
        {% if doc.subtitle %}<p class="subtitle">{{ doc.subtitle }}</p>{% endif %}
        {% if doc.focus_area %}<p class="focus">Focus: {{ doc.focus_area }}</p>{% endif %}
      </header>

      {% for notice in doc.notices %}
      <aside class="notice {{ notice.severity }}">
        <strong>{{ notice.title }}</strong>
        <p>{{ notice.message }}</p>
      </aside>
      {% endfor %}

      {% if doc.stats %}
      <dl class="stats">
        {% for stat in doc.stats %}<dt>{{ stat.label }}</dt><dd>{{ stat.value }}</dd>{% endfor %}
      </dl>
      {% endif %}

      {% if doc.empty_state %}<p class="empty">{{ doc.empty_state }}</p>{% endif %}

      {% for section in doc.sections %}
      <section>
        <h2>{{ section.title }}</h2>
        {% for item in section["items"] %}
          {% if item.kind == "bullet" %}
          <div class="item">
            <h3>{{ item.title }}</h3>
            {% for line in item.content %}<p>{{ line }}</p>{% endfor %}
          </div>
          {% else %}
          <p>{{ item.content }}</p>
          {% endif %}
        {% endfor %}
      </section>
      {% endfor %}

      {% for rec in doc.recommendations %}
      <section>
        <h2>{{ rec.number }}. {{ rec.title }}</h2>
        {% for part in rec.sections %}
          {% if part.title %}<h3>{{ part.title }}</h3>{% endif %}
          {% for line in part.content %}<p>{{ line }}</p>{% endfor %}
        {% endfor %}
      </section>
      {% endfor %}

      {% if doc.raw_text %}<pre class="raw">{{ doc.raw_text }}</pre>{% endif %}

      {% if doc.message and doc.message.kind == "structured" %}
      {% set message = doc.message.message %}
      <section>
        {% if message.intro %}<p class="intro">{{ inline(message.intro_spans) }}</p>{% endif %}
        {% if message.observations %}
        <h2>Key Observations</h2>
        <ul>{% for spans in message.observation_spans %}<li>{{ inline(spans) }}</li>{% endfor %}</ul>
        {% endif %}
        {% if message.data_points %}
        <h2>Data Points</h2>
        <table>
          <tbody>
          {% for point in message.data_points %}
            <tr>
              <th>{{ point.label }}</th>
              <td>{{ point.value }}</td>
              <td>{{ point.percent or "" }}</td>
              <td>{{ point.extra or "" }}</td>
            </tr>
          {% endfor %}
          </tbody>
        </table>
        {% endif %}
        {% if message.summary %}<h2>Summary</h2><p>{{ message.summary }}</p>{% endif %}
      </section>
      {% elif doc.message %}
      <section>
        {% for element in doc.message.elements %}
          {% if element.kind == "heading" %}<h3>{{ element.text }}</h3>
          {% elif element.kind == "bullet_list" %}<ul>{% for spans in element.item_spans %}<li>{{ inline(spans) }}</li>{% endfor %}</ul>
          {% elif element.kind == "numbered_list" %}<ol>{% for spans in element.item_spans %}<li>{{ inline(spans) }}</li>{% endfor %}</ol>
          {% elif element.kind == "callout" %}<div class="callout"><p>{{ inline(element.spans) }}</p></div>
          {% elif element.kind == "paragraph" %}<p>{{ inline(element.spans) }}</p>
          {% else %}<div class="spacer"></div>
          {% endif %}
        {% endfor %}
      </section>
      {% endif %}
    </main>
  </body>
</html>
""".strip()


def render_html(document: SurfaceDocument) -> str:
    template = Template(_HTML_TEMPLATE, autoescape=True)
    return template.render(doc=document.model_dump())
