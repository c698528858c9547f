# filmcraft/workers/tasks.py

import json
import os

from filmcraft.db.session import SessionLocal
from filmcraft import models
from filmcraft.core import files
from filmcraft.services.palette import swatch_for_file


def extract_shot_palette_task(shot_id: int) -> str:
    """
    RQ worker task to compute the dominant colors of a shot's reference image.
    This runs in the background so uploads return immediately.
    """
    db = SessionLocal()

    try:
        shot = db.query(models.Shot).filter_by(id=shot_id).first()
        if not shot or not shot.image_url:
            return f"Shot {shot_id} not found or image missing."

        path = files.object_path(files.SHOT_IMAGES_BUCKET, files.key_from_public_url(shot.image_url))
        if not os.path.exists(path):
            return f"Image file for shot {shot_id} is gone."

        shot.palette = json.dumps(swatch_for_file(path))
        db.commit()
        print(f"[Palette] Completed extraction for Shot {shot_id} ({shot.title})")
        return f"Palette extracted and saved for Shot {shot_id}."

    except Exception as e:
        db.rollback()
        print(f"[Palette ERROR] Failed for Shot {shot_id}: {e}")
        return f"Error extracting palette for {shot_id}: {e}"
    finally:
        db.close()
