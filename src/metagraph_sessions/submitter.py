"""
Transaction submitter — wraps a finalized command and its proof in an
envelope and POSTs it once.
"""

import logging
from typing import Any, Optional

from metagraph_sessions.constants import DATA_PATH
from metagraph_sessions.models.commands import Command
from metagraph_sessions.models.envelope import Proof, TransactionEnvelope
from metagraph_sessions.transport.http import HttpClient


class TransactionSubmitter:
    def __init__(self, http: HttpClient, logger: Optional[logging.Logger] = None):
        self._http = http
        self._logger = logger or logging.getLogger(__name__)

    async def submit(self, command: Command, proof: Proof) -> Any:
        """POST ``{value, proofs}`` to ``<endpoint>/data``.

        Returns the parsed response body on 2xx. Raises ``SubmissionError``
        otherwise; a rejected command is never resent, since replaying it
        could apply the state change twice.
        """
        envelope = TransactionEnvelope.build(command, [proof])
        self._logger.debug("Transaction body: %s", envelope.model_dump_json())
        response = await self._http.post(DATA_PATH, envelope.model_dump())
        self._logger.info("%s accepted by %s", command.tag, self._http.base_url)
        self._logger.debug("Response: %s", response)
        return response
