"""
CsvSummaryWriter - Écriture des exports CSV dans un fichier temporaire et streaming
"""

import csv
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class CsvSummaryWriter:
    """
    Le fichier généré est une ressource de la requête : il est supprimé dès
    que le flux se termine ou échoue, et remove() est sans effet sur un
    fichier déjà supprimé. Un crash du processus en plein flux peut laisser
    un fichier orphelin dans export_dir.
    """
    
    def __init__(self, export_dir: Optional[str] = None):
        self.export_dir = export_dir
        if export_dir:
            Path(export_dir).mkdir(parents=True, exist_ok=True)
    
    def write(self, prefix: str, header: Sequence[Tuple[str, str]], rows: List[Dict[str, object]]) -> Path:
        """Écrit les lignes dans un nouveau fichier CSV et retourne son chemin"""
        fd, path = tempfile.mkstemp(prefix=f"{prefix}-", suffix=".csv", dir=self.export_dir)
        fieldnames = [key for key, _ in header]
        try:
            with os.fdopen(fd, "w", newline="", encoding="utf-8") as fh:
                writer = csv.DictWriter(fh, fieldnames=fieldnames)
                writer.writerow({key: title for key, title in header})
                writer.writerows(rows)
        except Exception:
            self.remove(Path(path))
            raise
        
        logger.info(f"CSV export written: {path} ({len(rows)} row(s))")
        return Path(path)
    
    def stream(self, path: Path, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
        """Lit le fichier par blocs puis le supprime, y compris si le flux est interrompu"""
        try:
            with open(path, "rb") as fh:
                while True:
                    chunk = fh.read(chunk_size)
                    if not chunk:
                        break
                    yield chunk
        finally:
            self.remove(path)
    
    @staticmethod
    def remove(path: Path) -> None:
        try:
            path.unlink()
            logger.debug(f"CSV export removed: {path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to delete export file {path}: {e}")
