"""
JavaScript snippets evaluated inside the page.
"""

from __future__ import annotations

# Body text with links kept inline as "text [href]".
PAGE_CONTENT_SCRIPT = """
function getContentWithLinks() {
  function extractTextWithLinks(element) {
    const parts = [];
    for (const node of element.childNodes) {
      if (node.nodeType === Node.TEXT_NODE) {
        parts.push(node.textContent);
      } else if (node.nodeType === Node.ELEMENT_NODE) {
        if (node.tagName === 'A' && node.href) {
          const linkText = node.textContent.trim();
          const href = node.href;
          if (linkText && href && href !== 'javascript:void(0)') {
            parts.push(linkText + ' [' + href + ']');
          } else if (linkText) {
            parts.push(linkText);
          }
        } else {
          parts.push(extractTextWithLinks(node));
        }
      }
    }
    return parts.join('');
  }
  return document.body ? extractTextWithLinks(document.body) : '';
}
getContentWithLinks();
"""

__all__ = ["PAGE_CONTENT_SCRIPT"]
