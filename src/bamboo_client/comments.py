# -
# #%L
# Bamboo REST Client
# %%
# Copyright (C) 2025 Contrast Security, Inc.
# %%
# Contact: support@contrastsecurity.com
# License: Commercial
# NOTICE: This Software and the patented inventions embodied within may only be
# used as part of Contrast Security's commercial offerings. Even though it is
# made available through public repositories, use of this Software is subject to
# the applicable End User Licensing Agreement found at
# https://www.contrastsecurity.com/enduser-terms-0317a or as otherwise agreed
# between Contrast Security and the End User. The Software may not be reverse
# engineered, modified, repackaged, sold, redistributed or otherwise used in a
# way not consistent with the End User License Agreement.
# #L%
#

from dataclasses import dataclass

from bamboo_client.service import Service


@dataclass(frozen=True)
class Comment:
    """A comment attached to a build result."""
    content: str
    result_key: str

    def to_payload(self) -> dict:
        return {
            "content": self.content,
            "resultKey": self.result_key
        }

    @classmethod
    def from_api_response(cls, response_data: dict) -> 'Comment':
        return cls(
            content=response_data.get('content', ''),
            result_key=response_data.get('resultKey', '')
        )


class CommentService(Service):

    def add_comment(self, result_key: str, content: str):
        """
        Adds a comment to a build result.

        Args:
            result_key: Result to comment on, e.g. PROJ-PLAN-12
            content: Comment text

        Returns:
            requests.Response: The 204 response from the server

        Raises:
            UnexpectedStatusError: If the server does not answer 204
        """
        self.require(result_key, "Result key")
        comment = Comment(content=content, result_key=result_key)
        request = self.client.new_request("POST", f"result/{result_key}/comment.json", body=comment.to_payload())

        _, response = self.client.do(request, decode=False)
        self.expect_status(response, 204, f"Adding comment to {result_key}")
        return response
