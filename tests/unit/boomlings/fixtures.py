"""Server data shared by the boomlings tests."""

CREO_DUNE_DATA = (
    "1~|~771277~|~2~|~Creo - Dune~|~3~|~50531~|~4~|~CreoMusic~|~5~|~8.03~|~6~|~~|~7~|~UCsCWA3Y3JppL6feQiMRgm6Q"
    "~|~8~|~1~|~10~|~https%3A%2F%2Faudio.ngfiles.com%2F771000%2F771277_Creo---Dune.mp3%3Ff1508708604"
)

CREO_DUNE_DATA_TOO_MANY_FIELDS = (
    "1~|~771277~|~54~|~should be ignored~|~2~|~Creo - Dune~|~3~|~50531~|~4~|~CreoMusic~|~5~|~8.03~|~6~|~~|~7"
    "~|~UCsCWA3Y3JppL6feQiMRgm6Q~|~8~|~1~|~10~|~https%3A%2F%2Faudio.ngfiles.com%2F771000%2F771277_Creo---Dune.mp3"
    "%3Ff1508708604~|~9~|~should be ignored"
)

CREO_DUNE_URL = "https://audio.ngfiles.com/771000/771277_Creo---Dune.mp3?f1508708604"

DARK_REALM_DATA = (
    "1:11774780:2:Dark Realm:5:2:6:2073761:8:10:9:30:10:90786:12:0:13:20:14:10974:17:1:43:0:25::18:10:19:11994"
    ":42:0:45:0:3:TXkgYmVzdCBsZXZlbCB5ZXQuIFZpZGVvIG9uIG15IFlvdVR1YmUuIEhhdmUgZnVuIGluIHRoaXMgZmFzdC1wYWNlZCBERU1P"
    "TiA-OikgdjIgRml4ZWQgc29tZSB0aGluZ3M=:15:3:30:0:31:0:37:3:38:1:39:10:46:1:47:2:35:444085"
)

NOICE_DATA = (
    "1:62953227:2:Noice:5:1:6:14098234:8:10:9:30:10:329795:12:0:13:21:14:16024:17::43:0:25::18:5:19:24981:42:1"
    ":45:30320:3:Tm9pY2UgbGV2ZWwsIGhvcGUgeW91IGxpa2UgaXQ=:15:3:30:0:31:0:37:0:38:0:39:5:46:1:47:2:35:778510"
)

ANNOZONE_DATA = (
    "1:63292359:2:AnnoZone:5:2:6:5897998:8:10:9:50:10:7890:12:0:13:21:14:636:17::43:6:25::18:8:19:24979:42:1"
    ":45:51592:3:VGhlIEFubm8gU2VyaWVzIGhhcyByZXR1cm5lZCBhZnRlciAyIHllYXJzIHdpdGggYSAzcmQgbGV2ZWwhIERlZGljYXRlZCB0"
    "byB0aGUgQnJveXMuIE1vcmUgQW5ubyBTZXJpZXMgbGV2ZWxzIHRvIGNvbWUuLi4_:15:3:30:0:31:0:37:0:38:1:39:7:46:1:47:2"
    ":35:638150"
)

THUNDERZONE_DATA = (
    "1~|~638150~|~2~|~-ThunderZone v2-~|~3~|~30~|~4~|~Waterflame~|~5~|~8.78~|~6~|~~|~10~|~http%3A%2F%2Faudio"
    ".ngfiles.com%2F638000%2F638150_-ThunderZone-v2-.mp3~|~7~|~UCVuv5iaVR55QXIc_BHQLakA~|~8~|~1"
)

HAZMAT_DATA = (
    "1~|~778510~|~2~|~Hazmat~|~3~|~23384~|~4~|~CricketSaysChill~|~5~|~1.8~|~6~|~~|~10~|~https%3A%2F%2Faudio"
    ".ngfiles.com%2F778000%2F778510_Hazmat.mp3%3Ff1512785304~|~7~|~~|~8~|~1"
)

# AnnoZone's creator is missing on purpose
GET_GJ_LEVELS_RESPONSE = (
    f"{NOICE_DATA}|{ANNOZONE_DATA}"
    "#14098234:AleXins:4322668|7226087:Pauze:1705254"
    f"#{THUNDERZONE_DATA}~:~{HAZMAT_DATA}"
    "#11389:0:10"
    "#f687963dcfd37f857633563ee28b0cfadc727c97"
)

PROFILE_DATA = (
    "1:Serponge:2:4170784:13:149:17:1387:10:9:11:3:3:12385:46:2614:4:184:8:6:18:0:19:0:50:0:20:UCiQ9vJ1yc3DeD0j8Hx8nJ1A"
    ":21:120:22:35:23:38:24:35:25:33:26:20:28:1:43:14:48:1:30:16484:16:119741:31:0:44::45::49:0:29:1"
)

SEARCHED_USER_DATA = (
    "1:Serponge:2:4170784:13:149:17:1387:6::9:120:10:9:11:3:14:0:15:2:16:119741:3:12385:8:6:4:184"
)

# "I like this level", highlighted in elder mod green
LEVEL_COMMENT_DATA = "2~SSBsaWtlIHRoaXMgbGV2ZWw=~3~4170784~4~12~7~0~10~100~9~3 years~6~21467823~11~2~12~75,255,75"

COMMENT_USER_DATA = "1~Serponge~9~120~10~9~11~3~14~0~15~2~16~119741"

# "GG" by someone the servers send no user data for
UNLISTED_COMMENT_DATA = "2~R0c=~3~1705254~4~-3~7~1~9~5 days~6~21467900"

GET_GJ_COMMENTS_RESPONSE = (
    f"{LEVEL_COMMENT_DATA}:{COMMENT_USER_DATA}|{UNLISTED_COMMENT_DATA}:1~~9~~10~~11~~14~~15~~16~#2:0:20"
)

# "Hello world" and "GG"
GET_GJ_ACCOUNT_COMMENTS_RESPONSE = "2~SGVsbG8gd29ybGQ=~4~7~9~2 months~6~1849201|2~R0c=~4~0~9~1 year~6~1849100#2:0:10"
