"""Live-reload listener injected into the index document."""

BODY_TAG = "<body>"

RELOAD_LISTENER_TEMPLATE = """<body>
        <script>
            const eventSource = new EventSource('{stream_url}');
            eventSource.onmessage = function(e) {{
                console.info('server-sent event: ', e.data);

                if (e.data === 'reload') {{
                    eventSource.close();
                    document.location.reload();
                }}
            }};
            eventSource.onerror = function() {{
                console.warn('server-sent event: connection lost');
                eventSource.close();
            }}
        </script>
    """


def reload_listener(stream_url: str = "sse") -> str:
    """Build the ``<body>`` replacement carrying the listener script.

    Args:
        stream_url: URL of the event stream, relative to the page.

    Returns:
        Opening body tag followed by the script element.
    """
    return RELOAD_LISTENER_TEMPLATE.format(stream_url=stream_url)


def inject_reload_listener(document: str, stream_url: str = "sse") -> str:
    """Insert the listener right after the first opening body tag.

    Documents without a bare ``<body>`` tag are returned unchanged.

    Args:
        document: HTML source of the index page.
        stream_url: URL of the event stream, relative to the page.

    Returns:
        HTML with the listener script in place.
    """
    return document.replace(BODY_TAG, reload_listener(stream_url), 1)
