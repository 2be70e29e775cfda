"""GraphQL client configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for the GraphQL client.

    Attributes:
        use_multipart_form: Send every request as multipart/form-data with
            ``query`` and ``variables`` fields plus one part per file.
            Takes precedence over ``use_multipart_request_spec``.
        use_multipart_request_spec: Send requests carrying files using the
            GraphQL multipart request specification
            (https://github.com/jaydenseric/graphql-multipart-request-spec).
            Requests without files are sent as JSON. Variables cannot be
            combined with files in this mode.
        close_request_body: Ask the server to close the connection after
            each request instead of keeping it alive for reuse.
        timeout_seconds: Timeout of the default transport. Ignored when an
            ``http_client`` is passed to the client.
    """

    use_multipart_form: bool = False
    use_multipart_request_spec: bool = False
    close_request_body: bool = False
    timeout_seconds: float = 10.0

    @property
    def has_conflicting_modes(self) -> bool:
        return self.use_multipart_form and self.use_multipart_request_spec

    @property
    def supports_files(self) -> bool:
        return self.use_multipart_form or self.use_multipart_request_spec
