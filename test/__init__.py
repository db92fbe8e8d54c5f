import os
os.environ['BLINDSEG_SETTINGS'] = 'unittest'
