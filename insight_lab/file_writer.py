import json
import pandas as pd

class FileWriter:
    @staticmethod
    def write(path, content, content_type=False, columns=None):
        if content_type == "json":
            content = json.dumps(content, indent=2)
        elif content_type == "tsv":
            # Rows of dicts become a dataframe; with fixed columns an empty table still gets its header
            df = pd.DataFrame(content, columns=columns)
            df.to_csv(path, sep="\t", index=False)
            return
        
        with open(path, "wt") as writer:
            writer.write(content)
