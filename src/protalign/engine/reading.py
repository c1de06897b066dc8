import asyncio
import logging
from io import TextIOWrapper
from typing import Any, AsyncGenerator, Generator, Iterable, Union

from Bio import SeqIO
from Bio.Align import substitution_matrices

from protalign.engine.exceptions.reading import PenaltyTableFormatException
from protalign.engine.structures.genomics import SequenceRecord
from protalign.engine.structures.penalty import GAP_SYMBOL, PenaltyTable

logger = logging.getLogger(__name__)

HEADER_SENTINEL = ">"
ALPHABET_SENTINEL = "$"


def _read_lines(handle: Union[str, TextIOWrapper]) -> list[str]:
    if isinstance(handle, str):
        with open(handle) as file_handle:
            return file_handle.readlines()
    return handle.readlines()


def parse_sequence_records(lines: Iterable[str]) -> Generator[SequenceRecord, Any, None]:
    """
    Parses records made of a ``>`` header line followed by exactly one
    sequence line. Multi-line sequences are not supported: a header seen
    while another is pending replaces it, and a trailing header without a
    sequence is dropped.
    """
    description = None
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        if line.startswith(HEADER_SENTINEL):
            if description is not None:
                logger.debug("Discarding record \"%s\" which has no sequence.", description)
            description = line[len(HEADER_SENTINEL):]
        elif description is not None:
            yield SequenceRecord(description, line.rstrip())
            description = None
    if description is not None:
        logger.debug("Discarding trailing record \"%s\" which has no sequence.", description)


async def read_sequence_records(handle: Union[str, TextIOWrapper]) -> AsyncGenerator[SequenceRecord, Any]:
    lines = await asyncio.to_thread(_read_lines, handle)
    for record in parse_sequence_records(lines):
        yield record


async def read_fasta(handle: Union[str, TextIOWrapper]) -> AsyncGenerator[SequenceRecord, Any]:
    fasta_sequences = asyncio.to_thread(lambda: list(SeqIO.parse(handle, "fasta")))
    for fasta_sequence in await fasta_sequences:
        yield SequenceRecord(fasta_sequence.description, str(fasta_sequence.seq))


def parse_penalty_table(lines: Iterable[str], gap_symbol: str = GAP_SYMBOL) -> PenaltyTable:
    table = PenaltyTable(gap_symbol=gap_symbol)
    columns: Union[list[str], None] = None
    for line_number, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        if line.startswith(ALPHABET_SENTINEL):
            columns = [token[0] for token in line[len(ALPHABET_SENTINEL):].split()]
            continue
        if columns is None:
            raise PenaltyTableFormatException(line_number, "row found before the \"$\" alphabet line.")
        row_symbol = line[0]
        penalties = []
        for token in line[1:].split():
            try:
                penalties.append(int(token))
            except ValueError:
                break
        if len(penalties) > len(columns):
            raise PenaltyTableFormatException(
                line_number, f"row \"{row_symbol}\" has {len(penalties)} values for {len(columns)} columns.")
        for column_symbol, penalty in zip(columns, penalties):
            table.set(row_symbol, column_symbol, penalty)
    return table


async def read_penalty_table(handle: Union[str, TextIOWrapper], gap_symbol: str = GAP_SYMBOL) -> PenaltyTable:
    lines = await asyncio.to_thread(_read_lines, handle)
    return parse_penalty_table(lines, gap_symbol=gap_symbol)


def load_substitution_matrix(name: str, gap_score: Union[int, None] = None, gap_symbol: str = GAP_SYMBOL) -> PenaltyTable:
    return PenaltyTable.from_substitution_matrix(
        substitution_matrices.load(name), gap_score=gap_score, gap_symbol=gap_symbol, matrix_name=name)


def known_substitution_matrices() -> list[str]:
    return list(substitution_matrices.load())
